"""Errors raised by storage providers and the maintenance mode service"""


class StorageError(Exception):
    """Base class for failures reaching or using a storage backend"""


class BackendUnavailableError(StorageError):
    """The backend could not be reached or the I/O failed"""


class BackendCorruptError(StorageError):
    """The stored record could not be parsed"""


class StorageWriteConflictError(StorageError):
    """The backend rejected the write because of a concurrent change"""


class ServiceNotInitializedError(RuntimeError):
    """Raised when the service is used before initialize() has completed"""
