"""
This module provides configuration management for the WooCommerce REST API client.

Classes:
    ClientConfiguration: Immutable client settings (store URL, API prefix and version, token, port, timeout, transport overrides).
    ConfigurationError: Raised when required configuration is missing or unreadable.

Functions:
    load_config(path: Path) -> ClientConfiguration:
        Loads a client configuration from a YAML file.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple
import yaml


API_VERSIONS: Tuple[str, ...] = (
    "wc/v3",
    "wc/v2",
    "wc/v1",
    "wc-api/v3",
    "wc-api/v2",
    "wc-api/v1",
)

DEFAULT_API_PREFIX = "wp-json"
DEFAULT_VERSION = "wc/v3"
DEFAULT_ENCODING = "utf8"

# camelCase option names accepted alongside the snake_case field names
_ALIASES = {
    "jwtToken": "jwt_token",
    "wpAPIPrefix": "wp_api_prefix",
    "transportConfig": "transport_config",
    "axiosConfig": "transport_config",
    "requireToken": "require_token",
}

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0", ""}


class ConfigurationError(ValueError):
    pass


def _as_bool(name: str, value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class ClientConfiguration:
    url: str
    wp_api_prefix: str = DEFAULT_API_PREFIX
    version: str = DEFAULT_VERSION
    jwt_token: str | None = None
    encoding: str = DEFAULT_ENCODING
    port: int | str | None = None
    timeout: float | None = None
    transport_config: Mapping[str, Any] = field(default_factory=dict)
    require_token: bool = False

    def __post_init__(self):
        if not self.url:
            raise ConfigurationError("url is required")
        # Frozen instance: defaults have to be normalized through object.__setattr__.
        object.__setattr__(self, "require_token", _as_bool("require_token", self.require_token))
        if self.require_token and not self.jwt_token:
            raise ConfigurationError("jwt_token is required")
        object.__setattr__(self, "wp_api_prefix", self.wp_api_prefix or DEFAULT_API_PREFIX)
        object.__setattr__(self, "version", self.version or DEFAULT_VERSION)
        object.__setattr__(self, "jwt_token", self.jwt_token or None)
        object.__setattr__(self, "encoding", self.encoding or DEFAULT_ENCODING)
        object.__setattr__(self, "port", self.port or None)
        object.__setattr__(self, "transport_config",
                           MappingProxyType(copy.deepcopy(dict(self.transport_config or {}))))

    @property
    def has_port(self) -> bool:
        return self.port is not None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "ClientConfiguration":
        opts: Dict[str, Any] = {_ALIASES.get(k, k): v for k, v in data.items()}
        return ClientConfiguration(
            url=opts.get("url") or "",
            wp_api_prefix=opts.get("wp_api_prefix") or DEFAULT_API_PREFIX,
            version=opts.get("version") or DEFAULT_VERSION,
            jwt_token=opts.get("jwt_token"),
            encoding=opts.get("encoding") or DEFAULT_ENCODING,
            port=opts.get("port"),
            timeout=opts.get("timeout"),
            transport_config=opts.get("transport_config") or {},
            require_token=_as_bool("require_token", opts.get("require_token")),
        )


def load_config(path: Path) -> ClientConfiguration:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Expected a mapping in {path}, got {type(raw).__name__}")
    try:
        return ClientConfiguration.from_dict(raw)
    except ConfigurationError as e:
        raise ConfigurationError(f"{e} (in {path})") from e
