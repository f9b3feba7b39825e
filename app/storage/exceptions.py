class StorageError(Exception):
    """Base exception for all storage-related errors."""


class UnsupportedStorageDiskError(StorageError):
    """Raised when the configured storage disk type is not supported."""


class BlobWriteError(StorageError):
    """Raised when uploaded bytes cannot be written to the blob store."""
