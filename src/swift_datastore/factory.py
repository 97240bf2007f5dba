"""Factory for creating data stores from configuration."""

import logging
import os
from typing import Any

from .base import DataStore
from .config import SwiftStoreConfig

log = logging.getLogger(__name__)

SUPPORTED_TYPES = ("swift", "filesystem")


def create_data_store(
    storage_type: str | None = None,
    config: dict[str, Any] | None = None,
) -> DataStore:
    """Create the data store selected by ``storage_type``.

    The backend is chosen from a fixed set. Settings come from the matching
    section of ``config`` (see ``swift_datastore.config``); a missing
    ``swift`` section falls back to ``SWIFT_*`` environment variables.

    Args:
        storage_type: "swift" or "filesystem". Falls back to config["type"],
            then the DATASTORE_TYPE env var, then "swift".
        config: Parsed data store configuration.

    Returns:
        Configured DataStore instance.

    Raises:
        ValueError: If storage_type is unsupported or its settings are invalid.
    """
    config = config or {}
    backend = (storage_type or config.get("type") or os.getenv("DATASTORE_TYPE", "swift")).lower()

    if backend == "swift":
        return _create_swift_store(config.get("swift"))
    if backend == "filesystem":
        return _create_filesystem_store(config.get("filesystem") or {})

    raise ValueError(f"Unsupported storage type: {backend!r}. Supported: {', '.join(SUPPORTED_TYPES)}")


def _create_swift_store(section: dict[str, Any] | None) -> DataStore:
    from .swift_store import SwiftDataStore

    if section is None:
        log.debug("No swift section in data store config, reading SWIFT_* environment")
        return SwiftDataStore(SwiftStoreConfig.from_env())
    return SwiftDataStore(SwiftStoreConfig(**section))


def _create_filesystem_store(section: dict[str, Any]) -> DataStore:
    from .filesystem_store import FilesystemDataStore

    base_path = section.get("base_path")
    if not base_path:
        base_path = "./data/objects"
        log.info("Using default filesystem data store path: %s", base_path)
    return FilesystemDataStore(base_path=base_path, root_path=section.get("root_path"))
