class StorageError(Exception):
    """Raised when a stored document cannot be read or written."""
