"""Lazily built swift connection with a single reconnect-and-retry policy."""

import logging
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any, BinaryIO, TypeVar
from urllib.parse import quote

from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import Timeout
from swiftclient.client import Connection
from swiftclient.exceptions import ClientException

from .config import SwiftStoreConfig
from .exceptions import (
    StorageConflictError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)

log = logging.getLogger(__name__)

T = TypeVar("T")

# Connection-level failures, DNS lookups included; server answers are not in here.
TRANSIENT_ERRORS = (RequestsConnectionError, Timeout, OSError)

_STATUS_MAP = {
    404: StorageNotFoundError,
    409: StorageConflictError,
    401: StoragePermissionError,
    403: StoragePermissionError,
}


class SwiftConnection:
    """Owns the swift connection for one data store.

    The underlying ``swiftclient`` connection is built on first use and
    reused afterwards. ``invalidate()`` drops it so the next call builds a
    fresh one; the retry policy does this after a transport failure.
    """

    def __init__(self, config: SwiftStoreConfig):
        self._config = config
        self._connection: Connection | None = None
        self._lock = threading.Lock()

    @property
    def connection(self) -> Connection:
        conn = self._connection
        if conn is None:
            with self._lock:
                if self._connection is None:
                    self._connection = self._build()
                conn = self._connection
        return conn

    def invalidate(self) -> None:
        with self._lock:
            conn, self._connection = self._connection, None
        if conn is not None:
            conn.close()

    def _build(self) -> Connection:
        config = self._config
        if config.insecure:
            log.warning(
                "TLS certificate verification is disabled for container %s", config.container_name
            )
        options: dict[str, Any] = dict(config.connection_options)
        options.update(
            authurl=config.auth_url,
            user=config.username,
            key=config.api_key,
            insecure=config.insecure,
            retries=0,
        )
        log.debug("Connecting to swift at %s as %s", config.auth_url, config.username)
        return Connection(**{name: value for name, value in options.items() if value is not None})

    def put_object(
        self,
        container: str,
        path: str,
        contents: Callable[[], AbstractContextManager[BinaryIO]],
        headers: dict[str, str] | None = None,
    ) -> str:
        """Upload an object; ``contents`` is reopened for every attempt."""

        def _put(conn: Connection) -> str:
            with contents() as f:
                return conn.put_object(container, path, f, headers=headers)

        return self._retrying("put", path, _put)

    def get_object(
        self, container: str, path: str, chunk_size: int | None = None
    ) -> tuple[dict[str, str], Any]:
        """Return ``(headers, body)``; body is an iterator when chunk_size is set."""
        return self._retrying(
            "get", path, lambda conn: conn.get_object(container, path, resp_chunk_size=chunk_size)
        )

    def delete_object(self, container: str, path: str) -> None:
        self._retrying("delete", path, lambda conn: conn.delete_object(container, path))

    def public_url(self, container: str, path: str) -> str:
        quoted = quote(f"{container}/{path}")
        if self._config.url_host:
            return f"{self._config.url_scheme}://{self._config.url_host}/{quoted}"

        def _storage_url(conn: Connection) -> str:
            url = conn.url or conn.get_auth()[0]
            return url.rstrip("/")

        return f"{self._retrying('auth', path, _storage_url)}/{quoted}"

    def _retrying(self, action: str, key: str, func: Callable[[Connection], T]) -> T:
        try:
            return self._call(func, key)
        except TRANSIENT_ERRORS as e:
            log.warning("Swift %s of %s failed (%s), reconnecting and retrying once", action, key, e)
            self.invalidate()
        return self._call(func, key)

    def _call(self, func: Callable[[Connection], T], key: str) -> T:
        try:
            return func(self.connection)
        except ClientException as e:
            raise self._translate_error(e, key) from e

    def _translate_error(self, error: ClientException, key: str | None = None) -> StorageError:
        exc_cls = _STATUS_MAP.get(error.http_status, StorageError)
        return exc_cls(str(error), key=key, cause=error)
