"""Metadata transport through a single object header.

User metadata is carried in one ``X-Object-Meta-Data`` header holding a JSON
object. String values are form-escaped before serialisation so the header
only ever contains characters that survive HTTP transport; everything else
(numbers, booleans, nested structures) is serialised as-is.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus, unquote_plus

from requests.structures import CaseInsensitiveDict

log = logging.getLogger(__name__)

META_HEADER = "X-Object-Meta-Data"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _escape_values(meta: Mapping[str, Any]) -> dict[str, Any]:
    return {key: quote_plus(value) if isinstance(value, str) else value for key, value in meta.items()}


def _unescape_values(meta: Mapping[str, Any]) -> dict[str, Any]:
    return {key: unquote_plus(value) if isinstance(value, str) else value for key, value in meta.items()}


def encode_metadata(meta: Mapping[str, Any] | None) -> dict[str, str]:
    """Return the header mapping that carries ``meta``."""
    return {META_HEADER: json.dumps(_escape_values(meta or {}))}


def decode_metadata(headers: Mapping[str, str] | None) -> dict[str, Any]:
    """Recover user metadata from response headers.

    A missing, empty or unparseable header yields an empty mapping; a read
    is never failed because of metadata.
    """
    raw = CaseInsensitiveDict(headers or {}).get(META_HEADER)
    if not raw:
        return {}
    try:
        meta = json.loads(raw)
    except ValueError as e:
        log.warning("Ignoring malformed %s header: %s", META_HEADER, e)
        return {}
    if not isinstance(meta, dict):
        log.warning("Ignoring %s header that is not a JSON object", META_HEADER)
        return {}
    return _unescape_values(meta)


def build_storage_headers(
    content_type: str | None,
    meta: Mapping[str, Any] | None,
    storage_headers: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Merge the headers sent with an upload.

    Later sources win, compared case-insensitively: content type, then the
    metadata header, then the configured storage headers, then the per-call
    headers.
    """
    merged: CaseInsensitiveDict = CaseInsensitiveDict({"Content-Type": content_type or DEFAULT_CONTENT_TYPE})
    merged.update(encode_metadata(meta))
    merged.update(storage_headers or {})
    merged.update(headers or {})
    return dict(merged)
