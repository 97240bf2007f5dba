"""Abstract base class and value types shared by data store backends."""

import io
import mimetypes
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO

from .metadata import DEFAULT_CONTENT_TYPE


@dataclass
class Content:
    """Content handed to a data store by the host.

    ``data`` is raw bytes, text (stored UTF-8 encoded) or a ``Path`` to a file
    on disk; only ``Path`` objects are read from disk. ``open()`` yields a
    fresh binary stream on every call.
    """

    data: bytes | str | Path
    name: str | None = None
    mime_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.mime_type is None:
            guessed, _ = mimetypes.guess_type(self.name) if self.name else (None, None)
            self.mime_type = guessed or DEFAULT_CONTENT_TYPE

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        if isinstance(self.data, bytes):
            yield io.BytesIO(self.data)
        elif isinstance(self.data, str):
            yield io.BytesIO(self.data.encode("utf-8"))
        else:
            with open(self.data, "rb") as f:
                yield f


@dataclass
class StoredContent:
    """Result of a successful read; unpacks as ``(content, metadata)``."""

    content: bytes | Iterator[bytes]
    metadata: dict[str, Any] = field(default_factory=dict)
    content_type: str = DEFAULT_CONTENT_TYPE

    def __iter__(self):
        return iter((self.content, self.metadata))


class DataStore(ABC):
    """Backend-agnostic interface the host uses to persist content."""

    @abstractmethod
    def write(
        self,
        content: Content,
        path: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """Store content and return the uid needed to read it back."""

    @abstractmethod
    def read(self, uid: str) -> StoredContent | None:
        """Return stored content, or None if nothing is stored under uid."""

    @abstractmethod
    def destroy(self, uid: str) -> None:
        """Delete an object. No-op if the uid doesn't exist."""

    @abstractmethod
    def url_for(self, uid: str) -> str:
        """Return the public URL for the given uid."""
