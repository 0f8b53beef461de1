"""
WooCommerceRestApi builds authenticated requests for the WooCommerce REST API and hands them to an httpx transport.

Attributes:
    config (ClientConfiguration): Immutable client settings.
    _transport (Transport): Async callable that sends assembled request options.
    _platform (Platform): Decides whether a User-Agent header is sent.

Methods:
    __init__(options, *, transport=None, platform=None):
        Accepts a ClientConfiguration, a mapping of options or another client.
        Raises ConfigurationError when the store URL is missing.

    build_url(endpoint):
        Joins store URL, API prefix, API version and endpoint, adding the port override to the host if configured.

    build_request(method, endpoint, data=None, params=None):
        Assembles the request options: headers, flattened query params, JSON body, timeout, encoding.
        Transport overrides from the configuration are merged last and win on every key.

    request(method, endpoint, data=None, params=None):
        Dispatches the request and returns the transport's response unmodified.

    get() / post() / put() / delete() / options():
        Verb shortcuts around request().

    aclose(), __aenter__(), __aexit__(exc_type, exc, tb):
        Release the default transport.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping
from urllib.parse import urlsplit, urlunsplit

from . import __version__
from .config import ClientConfiguration, load_config
from .log import log_event
from .transport import HostPlatform, HttpxTransport, Platform, RequestOptions, Transport


USER_AGENT = f"WooCommerce REST API - Python Client/{__version__}"
JSON_CONTENT_TYPE = "application/json;charset=utf-8"


def flatten_params(params: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Flatten one level of nested query parameters into bracketed keys.

    {"meta": {"key": "color"}} becomes {"meta[key]": "color"} and
    {"include": [1, 2]} becomes {"include[0]": 1, "include[1]": 2}.
    None values are dropped. Values nested deeper than one level are kept as-is
    under the bracketed key and httpx will str() them.
    """
    query: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            for prop, item in value.items():
                query[f"{key}[{prop}]"] = item
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                query[f"{key}[{index}]"] = item
        else:
            query[key] = value
    return query


def _with_port(url: str, port: int | str) -> str:
    parts = urlsplit(url)
    userinfo, at, hostport = parts.netloc.rpartition("@")
    if hostport.startswith("["):
        host = hostport[: hostport.index("]") + 1]
    else:
        host = hostport.split(":", 1)[0]
    return urlunsplit(parts._replace(netloc=f"{userinfo}{at}{host}:{port}"))


def _redact(url: str) -> str:
    parts = urlsplit(url)
    if "@" not in parts.netloc:
        return url
    return urlunsplit(parts._replace(netloc=parts.netloc.rpartition("@")[2]))


class WooCommerceRestApi:
    def __init__(
        self,
        options: ClientConfiguration | Mapping[str, Any] | "WooCommerceRestApi" | None = None,
        *,
        transport: Transport | None = None,
        platform: Platform | None = None,
    ):
        if isinstance(options, WooCommerceRestApi):
            self.config = options.config
        elif isinstance(options, ClientConfiguration):
            self.config = options
        else:
            self.config = ClientConfiguration.from_dict(options or {})
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport()
        self._platform = platform or HostPlatform()
        log_event("client_init", level=logging.DEBUG, url=_redact(self.config.url),
                  version=self.config.version, port=self.config.port,
                  token=self.config.jwt_token is not None)

    @classmethod
    def from_file(cls, path: Path, **kwargs) -> "WooCommerceRestApi":
        return cls(load_config(path), **kwargs)

    def build_url(self, endpoint: str) -> str:
        base = self.config.url if self.config.url.endswith("/") else self.config.url + "/"
        url = f"{base}{self.config.wp_api_prefix}/{self.config.version}/{endpoint}"
        if self.config.has_port:
            url = _with_port(url, self.config.port)
        return url

    def build_request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> RequestOptions:
        headers = {"Accept": "application/json"}
        if self._platform.exposes_process_identity():
            headers["User-Agent"] = USER_AGENT
        if self.config.jwt_token:
            headers["Authorization"] = f"Bearer {self.config.jwt_token}"

        options: RequestOptions = {
            "method": method,
            "url": self.build_url(endpoint),
            "headers": headers,
            "params": flatten_params(params),
            "encoding": self.config.encoding,
        }
        if self.config.timeout is not None:
            options["timeout"] = self.config.timeout
        if data is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
            options["content"] = json.dumps(data, ensure_ascii=False, separators=(",", ":"))

        # Overrides replace whole top-level keys; "headers" is not merged.
        options.update(copy.deepcopy(dict(self.config.transport_config)))
        return options

    async def request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        options = self.build_request(method, endpoint, data, params)
        log_event("request", level=logging.DEBUG, method=options.get("method"),
                  url=_redact(str(options.get("url") or "")), params=sorted(options.get("params") or {}),
                  has_body="content" in options)
        return await self._transport(options)

    async def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", endpoint, None, params)

    async def post(self, endpoint: str, data: Any, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("POST", endpoint, data, params)

    async def put(self, endpoint: str, data: Any, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("PUT", endpoint, data, params)

    async def delete(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("DELETE", endpoint, None, params)

    async def options(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("OPTIONS", endpoint, None, params)

    async def aclose(self):
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
        return False
