class ReportError(Exception):
    """Base exception for report handling."""


class ReportValidationError(ReportError):
    """Raised when a report draft is missing required fields."""


class ReportSerializationError(ReportError):
    """Raised when a stored report record cannot be decoded."""
