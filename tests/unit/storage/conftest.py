"""Shared fixtures: an in-memory stand-in for swiftclient's Connection."""

from unittest.mock import patch

import pytest
from swiftclient.exceptions import ClientException

from swift_datastore.swift_store import SwiftDataStore

CONTAINER_NAME = "test-gem"


class FakeSwift:
    """Objects shared by every connection built during a test."""

    def __init__(self):
        self.objects: dict[tuple[str, str], tuple[dict[str, str], bytes]] = {}
        self.connections: list["FakeConnection"] = []
        self.failures: list[Exception] = []
        self.calls: list[tuple] = []

    def fail_next(self, *errors: Exception) -> None:
        self.failures.extend(errors)

    def connect(self, **kwargs) -> "FakeConnection":
        conn = FakeConnection(self, kwargs)
        self.connections.append(conn)
        return conn


class FakeConnection:
    def __init__(self, swift: FakeSwift, kwargs: dict):
        self.swift = swift
        self.kwargs = kwargs
        self.url = None
        self.closed = False

    def _maybe_fail(self, op: str, *args) -> None:
        self.swift.calls.append((op, *args))
        if self.swift.failures:
            raise self.swift.failures.pop(0)

    def put_object(self, container, obj, contents, headers=None):
        self._maybe_fail("put", container, obj)
        data = contents.read()
        stored = {k.lower(): v for k, v in (headers or {}).items()}
        self.swift.objects[(container, obj)] = (stored, data)
        return "etag"

    def get_object(self, container, obj, resp_chunk_size=None):
        self._maybe_fail("get", container, obj)
        if (container, obj) not in self.swift.objects:
            raise ClientException("Object GET failed", http_status=404)
        headers, data = self.swift.objects[(container, obj)]
        if resp_chunk_size:
            chunks = [data[i:i + resp_chunk_size] for i in range(0, len(data), resp_chunk_size)]
            return dict(headers), iter(chunks)
        return dict(headers), data

    def delete_object(self, container, obj):
        self._maybe_fail("delete", container, obj)
        if (container, obj) not in self.swift.objects:
            raise ClientException("Object DELETE failed", http_status=404)
        del self.swift.objects[(container, obj)]

    def get_auth(self):
        self._maybe_fail("auth")
        self.url = "https://swift.example.com/v1/AUTH_test"
        return self.url, "token"

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in [
        "DATASTORE_TYPE",
        "SWIFT_CONTAINER_NAME",
        "SWIFT_AUTH_URL",
        "SWIFT_USERNAME",
        "SWIFT_API_KEY",
        "SWIFT_URL_SCHEME",
        "SWIFT_URL_HOST",
        "SWIFT_ROOT_PATH",
        "SWIFT_INSECURE",
    ]:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def fake_swift():
    swift = FakeSwift()
    with patch("swift_datastore.connection.Connection", side_effect=swift.connect):
        yield swift


@pytest.fixture()
def store_options():
    return {
        "container_name": CONTAINER_NAME,
        "auth_url": "https://keystone.example.com/v3",
        "username": "media-writer",
        "api_key": "secret",
        "storage_headers": {"x-amz-acl": "public-read"},
        "url_scheme": "https",
    }


@pytest.fixture()
def data_store(fake_swift, store_options):
    return SwiftDataStore(**store_options)
