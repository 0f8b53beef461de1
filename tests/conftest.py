"""Shared fixtures: a recording transport and fixed platforms, so no request leaves the process."""

from __future__ import annotations

import pytest

from woocommerce_rest_api import WooCommerceRestApi


class RecordingTransport:
    def __init__(self, response=None):
        self.calls: list[dict] = []
        self.response = response if response is not None else object()
        self.closed = False

    async def __call__(self, options):
        self.calls.append(options)
        return self.response

    async def aclose(self):
        self.closed = True

    @property
    def last(self) -> dict:
        return self.calls[-1]


class FixedPlatform:
    def __init__(self, identity: bool):
        self.identity = identity

    def exposes_process_identity(self) -> bool:
        return self.identity


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_api(transport):
    def _make(platform_identity: bool = True, **options) -> WooCommerceRestApi:
        options.setdefault("url", "https://shop.example.com")
        return WooCommerceRestApi(
            options, transport=transport, platform=FixedPlatform(platform_identity))
    return _make


@pytest.fixture
def api(make_api) -> WooCommerceRestApi:
    return make_api(jwt_token="secret-token")
