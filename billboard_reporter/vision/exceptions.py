class VisionError(Exception):
    """Raised when image analysis by the vision service fails."""


class VisionNetworkError(VisionError):
    """Raised when the vision service cannot be reached or times out."""


class VisionResponseError(VisionError):
    """Raised when the vision service answers with an error or unreadable body."""
