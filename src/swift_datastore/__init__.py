"""Pluggable data stores for content-management hosts, backed by OpenStack Swift."""

from .base import Content, DataStore, StoredContent
from .config import SwiftStoreConfig, ensure_configured, load_config_file
from .exceptions import (
    NotConfiguredError,
    StorageConflictError,
    StorageError,
    StorageNotFoundError,
    StoragePathError,
    StoragePermissionError,
)
from .factory import create_data_store
from .filesystem_store import FilesystemDataStore
from .swift_store import SwiftDataStore

__all__ = [
    "Content",
    "DataStore",
    "StoredContent",
    "SwiftStoreConfig",
    "ensure_configured",
    "load_config_file",
    "StorageError",
    "NotConfiguredError",
    "StorageNotFoundError",
    "StorageConflictError",
    "StoragePermissionError",
    "StoragePathError",
    "create_data_store",
    "FilesystemDataStore",
    "SwiftDataStore",
]
