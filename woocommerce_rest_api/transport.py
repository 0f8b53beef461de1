"""
HttpxTransport dispatches assembled request options through httpx.

Attributes:
    _client (httpx.AsyncClient): The underlying httpx async client instance.
    _owns_client (bool): Whether aclose() should close the httpx client.

Methods:
    __init__(client: httpx.AsyncClient | None = None):
        Wraps the given client, or creates one.

    __call__(options):
        Sends a request built from the option dict and returns the raw response.
        The "encoding" key is not an httpx request argument; it is applied to the response instead.

    aclose():
        Closes the underlying httpx client if this transport created it.

Platform and HostPlatform describe whether the running interpreter exposes a process identity,
which decides if a User-Agent header is sent.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import sys
from typing import Any, Awaitable, Dict, Protocol

import httpx


RequestOptions = Dict[str, Any]


class Transport(Protocol):
    def __call__(self, options: RequestOptions) -> Awaitable[Any]: ...


class Platform(Protocol):
    def exposes_process_identity(self) -> bool: ...


class HostPlatform:
    # Browser-hosted interpreters send the browser's own User-Agent.
    _SANDBOXED = {"emscripten", "wasi"}

    def __init__(self, name: str | None = None):
        self.name = name or sys.platform

    def exposes_process_identity(self) -> bool:
        return self.name not in self._SANDBOXED


class HttpxTransport:
    def __init__(self, client: httpx.AsyncClient | None = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def __call__(self, options: RequestOptions) -> httpx.Response:
        request_args = dict(options)
        encoding = request_args.pop("encoding", None)
        response = await self._client.request(**request_args)
        if encoding:
            response.encoding = encoding
        return response

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
        return False
