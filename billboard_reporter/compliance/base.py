from abc import ABC, abstractmethod

from billboard_reporter.compliance.models import Coordinates
from billboard_reporter.vision.models import BillboardSize


class ZoneSizeLookup(ABC):
    """Contract for permit-zoning lookups."""

    @abstractmethod
    def max_allowed_size(self, coordinates: Coordinates | None) -> BillboardSize | None:
        """Return the largest billboard size permitted at a location.

        Args:
            coordinates: Billboard position, or None when unknown.

        Returns:
            The permitted size class, or None when the zone is unknown.
        """


class ProtectedSiteLookup(ABC):
    """Contract for proximity checks against schools and religious sites."""

    @abstractmethod
    def is_near_protected_site(self, coordinates: Coordinates | None) -> bool:
        """Return True if the location is too close to a protected site."""
