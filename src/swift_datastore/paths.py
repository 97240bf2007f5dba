"""Uid generation and storage path resolution."""

import uuid

DEFAULT_NAME = "file"


def generate_uid(name: str | None = None) -> str:
    """Return ``<uuid4>/<name>``, keeping the name exactly as given."""
    return f"{uuid.uuid4()}/{name or DEFAULT_NAME}"


def full_path(root_path: str | None, uid: str) -> str:
    """Join ``root_path`` and ``uid`` with a single separator.

    The uid is returned unchanged when there is no root path.
    """
    if not root_path:
        return uid
    root = root_path.rstrip("/")
    if not root:
        return uid
    return f"{root}/{uid.lstrip('/')}"
