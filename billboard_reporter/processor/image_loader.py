from pathlib import Path

from billboard_reporter.processor.exceptions import UnsupportedImageTypeError


class ImageLoader:
    """Validates a photo path and reads its bytes."""

    SUPPORTED_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"})

    def load(self, path: Path) -> bytes:
        """Read image bytes from disk.

        Raises:
            UnsupportedImageTypeError: if the suffix is not a known image type.
            FileNotFoundError: if the file does not exist.
        """
        if path.suffix.lower() not in self.SUPPORTED_SUFFIXES:
            raise UnsupportedImageTypeError(
                f"'{path.suffix or path.name}' is not a supported image type"
            )
        if not path.is_file():
            raise FileNotFoundError(f"Image not found: {path}")
        return path.read_bytes()
