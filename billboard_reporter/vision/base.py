from abc import ABC, abstractmethod
from typing import Any


class BaseVisionClient(ABC):
    """Contract for provider-specific image annotation clients."""

    @abstractmethod
    def annotate(self, image_bytes: bytes) -> dict[str, Any]:
        """Request text, object and logo detection for one image.

        Args:
            image_bytes: Raw encoded image (JPEG, PNG, ...).

        Returns:
            The decoded JSON body of the provider response.

        Raises:
            VisionError: on any failure.
        """

    def close(self) -> None:
        """Release any connection the client holds."""
