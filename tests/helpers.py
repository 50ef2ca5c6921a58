"""Shared test helpers for Harmonic MCP tests."""

from __future__ import annotations

from typing import Any

import httpx

from packages.core.src.config import AuthScheme, CompanyLookup, HarmonicConfig

TEST_BASE_URL = "https://api.harmonic.test"


class MockHarmonicAPI:
    """In-process stand-in for the Harmonic API.

    Routes are keyed by (method, path). Every request is recorded so tests
    can assert on exactly what went over the wire, or that nothing did.
    Unrouted requests answer 404.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], dict[str, Any]] = {}

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        text: str | None = None,
        error: type[httpx.TransportError] | None = None,
    ) -> None:
        self._routes[(method, path)] = {
            "status": status,
            "json": json,
            "text": text,
            "error": error,
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text='{"error": "not found"}')
        if route["error"] is not None:
            raise route["error"]("mocked transport failure", request=request)
        if route["text"] is not None:
            return httpx.Response(route["status"], text=route["text"])
        return httpx.Response(route["status"], json=route["json"])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def make_config(**overrides: Any) -> HarmonicConfig:
    """Build a config that ignores the developer's environment and .env file."""
    values: dict[str, Any] = {
        "base_url": TEST_BASE_URL,
        "auth_scheme": AuthScheme.APIKEY_HEADER,
        "company_lookup": CompanyLookup.POST_BODY,
        "default_page_size": 50,
        "timeout_seconds": 5.0,
    }
    values.update(overrides)
    return HarmonicConfig(_env_file=None, **values)

