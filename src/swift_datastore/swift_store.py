"""OpenStack Swift data store."""

import logging
from typing import Any

from .base import Content, DataStore, StoredContent
from .config import SwiftStoreConfig, ensure_configured
from .connection import SwiftConnection
from .exceptions import StorageConflictError, StorageNotFoundError
from .metadata import DEFAULT_CONTENT_TYPE, build_storage_headers, decode_metadata
from .paths import full_path, generate_uid

log = logging.getLogger(__name__)


class SwiftDataStore(DataStore):
    """Stores content as objects in a single Swift container.

    Objects are addressed by the uid returned from ``write``. The configured
    ``root_path`` is prepended to every uid to form the object name, and user
    metadata travels in the ``X-Object-Meta-Data`` header.

    ``write``, ``read`` and ``url_for`` check the configuration on every
    call. ``destroy`` only does so when ``validate_on_destroy`` is set.
    """

    def __init__(self, config: SwiftStoreConfig | None = None, **options: Any):
        if config is not None and options:
            raise ValueError("Pass either a SwiftStoreConfig or keyword options, not both")
        self.config = config or SwiftStoreConfig(**options)
        self._connection = SwiftConnection(self.config)

    @property
    def connection(self) -> SwiftConnection:
        return self._connection

    def write(
        self,
        content: Content,
        path: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        ensure_configured(self.config, type(self).__name__)

        uid = path or generate_uid(content.name)
        object_path = full_path(self.config.root_path, uid)
        all_headers = build_storage_headers(
            content.mime_type, content.meta, self.config.storage_headers, headers
        )
        log.debug("Writing %s to swift container %s", object_path, self.config.container_name)
        self._connection.put_object(self.config.container_name, object_path, content.open, all_headers)
        return uid

    def read(self, uid: str, chunk_size: int | None = None) -> StoredContent | None:
        ensure_configured(self.config, type(self).__name__)

        object_path = full_path(self.config.root_path, uid)
        log.debug("Reading %s from swift container %s", object_path, self.config.container_name)
        try:
            headers, body = self._connection.get_object(
                self.config.container_name, object_path, chunk_size=chunk_size
            )
        except StorageNotFoundError:
            log.debug("No object stored at %s", object_path)
            return None
        return StoredContent(
            content=body,
            metadata=decode_metadata(headers),
            content_type=headers.get("content-type", DEFAULT_CONTENT_TYPE),
        )

    def destroy(self, uid: str) -> None:
        if self.config.validate_on_destroy:
            ensure_configured(self.config, type(self).__name__)

        object_path = full_path(self.config.root_path, uid)
        try:
            self._connection.delete_object(self.config.container_name, object_path)
        except (StorageNotFoundError, StorageConflictError) as e:
            log.warning("%s destroy error: %s", type(self).__name__, e)

    def url_for(self, uid: str) -> str:
        ensure_configured(self.config, type(self).__name__)
        return self._connection.public_url(self.config.container_name, full_path(self.config.root_path, uid))
