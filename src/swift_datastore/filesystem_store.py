"""
Filesystem-based data store.

Keeps the same uid contract as the Swift store so hosts can run without an
object store in development and tests.

Directory structure:
{base_path}/{root_path}/{uuid}/
├── photo.png
└── photo.png.meta.json
"""

import json
import logging
import os
import shutil
from typing import Dict, Optional

from requests.structures import CaseInsensitiveDict

from .base import Content, DataStore, StoredContent
from .exceptions import StoragePathError
from .metadata import DEFAULT_CONTENT_TYPE
from .paths import full_path, generate_uid

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta.json"


class FilesystemDataStore(DataStore):
    """Data store backed by a local directory."""

    def __init__(self, base_path: str, root_path: Optional[str] = None):
        """
        Initialize filesystem storage.

        Args:
            base_path: Directory that holds every stored object
            root_path: Optional prefix prepended to every uid
        """
        if not base_path:
            raise ValueError("base_path cannot be empty")

        self.base_path = os.path.abspath(base_path)
        self.root_path = root_path

        try:
            os.makedirs(self.base_path, exist_ok=True)
            logger.info("FilesystemDataStore initialized at: %s", self.base_path)
        except OSError as e:
            logger.error("Failed to create base directory '%s': %s", self.base_path, e)
            raise ValueError(f"Could not create base_path '{self.base_path}': {e}") from e

    def _file_path(self, uid: str) -> str:
        path = os.path.abspath(os.path.join(self.base_path, full_path(self.root_path, uid)))
        # Keep every uid inside base_path
        if os.path.commonpath([self.base_path, path]) != self.base_path or path == self.base_path:
            raise StoragePathError(f"uid resolves outside of {self.base_path}", key=uid)
        return path

    def write(
        self,
        content: Content,
        path: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        uid = path or generate_uid(content.name)
        file_path = self._file_path(uid)
        os.makedirs(os.path.dirname(file_path), exist_ok=True)

        with content.open() as src, open(file_path, "wb") as dst:
            shutil.copyfileobj(src, dst)

        content_type = CaseInsensitiveDict(headers or {}).get("Content-Type") or content.mime_type
        with open(file_path + META_SUFFIX, "w", encoding="utf-8") as f:
            json.dump({"content_type": content_type, "meta": content.meta}, f)

        logger.debug("Wrote %s to %s", uid, file_path)
        return uid

    def read(self, uid: str) -> Optional[StoredContent]:
        file_path = self._file_path(uid)
        if not os.path.isfile(file_path):
            return None

        with open(file_path, "rb") as f:
            data = f.read()

        sidecar: Dict = {}
        if os.path.isfile(file_path + META_SUFFIX):
            try:
                with open(file_path + META_SUFFIX, "r", encoding="utf-8") as f:
                    sidecar = json.load(f)
            except ValueError as e:
                logger.warning("Ignoring malformed metadata for %s: %s", uid, e)
        if not isinstance(sidecar, dict):
            logger.warning("Ignoring metadata for %s that is not a JSON object", uid)
            sidecar = {}
        meta = sidecar.get("meta")

        return StoredContent(
            content=data,
            metadata=meta if isinstance(meta, dict) else {},
            content_type=sidecar.get("content_type") or DEFAULT_CONTENT_TYPE,
        )

    def destroy(self, uid: str) -> None:
        file_path = self._file_path(uid)
        for target in (file_path, file_path + META_SUFFIX):
            if not os.path.isfile(target):
                logger.debug("Nothing to delete at %s", target)
                continue
            try:
                os.remove(target)
            except FileNotFoundError:
                logger.debug("Nothing to delete at %s", target)
        self._prune_empty_dirs(os.path.dirname(file_path))

    def _prune_empty_dirs(self, directory: str) -> None:
        """Remove empty directories left behind by a uid, stopping at base_path."""
        while directory != self.base_path and directory.startswith(self.base_path + os.sep):
            try:
                os.rmdir(directory)
            except OSError:
                # Not empty, or already gone
                return
            directory = os.path.dirname(directory)

    def url_for(self, uid: str) -> str:
        return f"file://{self._file_path(uid)}"
