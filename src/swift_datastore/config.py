"""
Configuration for the Swift data store.

Settings can be built directly, read from ``SWIFT_*`` environment variables,
or loaded from a YAML document of the form::

    type: swift          # or "filesystem"
    swift:
      container_name: media
      auth_url: https://keystone.example.com/v3
      username: media-writer
      api_key: secret
      root_path: uploads
      storage_headers:
        X-Object-Meta-Owner: cms
    filesystem:
      base_path: ./data/objects
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import NotConfiguredError

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("auth_url", "username", "api_key", "container_name")

_TRUE_VALUES = {"1", "true", "yes", "on"}


class SwiftStoreConfig(BaseModel):
    """Connection and layout settings for a Swift container."""

    model_config = ConfigDict(extra="forbid")

    container_name: Optional[str] = Field(
        default=None,
        description="Container holding every object written by this store"
    )
    auth_url: Optional[str] = Field(
        default=None,
        description="Keystone/TempAuth authentication endpoint"
    )
    username: Optional[str] = Field(
        default=None,
        description="Account user name"
    )
    api_key: Optional[str] = Field(
        default=None,
        description="Account API key or password"
    )
    url_scheme: str = Field(
        default="http",
        description="Scheme used for public URLs when url_host is set"
    )
    url_host: Optional[str] = Field(
        default=None,
        description="Host used for public URLs instead of the storage URL"
    )
    root_path: Optional[str] = Field(
        default=None,
        description="Prefix prepended to every uid"
    )
    storage_headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers sent with every upload"
    )
    connection_options: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific keyword options for the swift connection"
    )
    insecure: bool = Field(
        default=False,
        description="Skip TLS certificate verification for this store only"
    )
    validate_on_destroy: bool = Field(
        default=False,
        description="Require a complete configuration before destroy"
    )

    @classmethod
    def from_env(cls) -> "SwiftStoreConfig":
        """Build a config from ``SWIFT_*`` environment variables."""
        return cls(
            container_name=os.getenv("SWIFT_CONTAINER_NAME"),
            auth_url=os.getenv("SWIFT_AUTH_URL"),
            username=os.getenv("SWIFT_USERNAME"),
            api_key=os.getenv("SWIFT_API_KEY"),
            url_scheme=os.getenv("SWIFT_URL_SCHEME", "http"),
            url_host=os.getenv("SWIFT_URL_HOST"),
            root_path=os.getenv("SWIFT_ROOT_PATH"),
            insecure=os.getenv("SWIFT_INSECURE", "").strip().lower() in _TRUE_VALUES,
        )


def ensure_configured(config: SwiftStoreConfig, adapter: str) -> None:
    """Fail on the first missing required setting.

    Runs on every call so that later changes to ``config`` are always seen.
    """
    for field in REQUIRED_FIELDS:
        if not getattr(config, field):
            raise NotConfiguredError(field, adapter)


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """Read a data store YAML document and return it as a dict."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Data store config in {path} must be a mapping")
    log.debug("Loaded data store config from %s", path)
    return data
