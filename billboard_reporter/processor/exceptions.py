class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class AnalysisInProgressError(ProcessorError):
    """Raised when an analysis is requested while another one is running."""


class UnsupportedImageTypeError(ProcessorError):
    """Raised when a file does not look like a supported photo format."""
