"""Exception hierarchy shared by the data store backends."""


class StorageError(Exception):
    """Base exception for all data store operations."""

    def __init__(self, message: str, key: str | None = None, cause: Exception | None = None):
        self.key = key
        self.cause = cause
        super().__init__(message)


class NotConfiguredError(StorageError):
    """Raised before any network call when a required setting is missing."""

    def __init__(self, field: str, adapter: str):
        self.field = field
        self.adapter = adapter
        super().__init__(f"You need to configure {adapter} with {field}")


class StorageNotFoundError(StorageError):
    """Raised when a requested object does not exist."""


class StorageConflictError(StorageError):
    """Raised when the store rejects an operation with a conflict (409)."""


class StoragePermissionError(StorageError):
    """Raised when credentials are invalid or access is denied."""


class StoragePathError(StorageError):
    """Raised when a uid would resolve outside the store's root."""
