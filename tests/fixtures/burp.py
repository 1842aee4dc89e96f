"""Fake Burp REST API for deterministic testing."""

from __future__ import annotations

from collections.abc import Callable

import httpx

RouteMap = dict[str, httpx.Response | Callable[[httpx.Request], httpx.Response]]


class FakeBurp:
    """Canned Burp REST API served through ``httpx.MockTransport``.

    *routes* maps ``"METHOD /path"`` to a response (or a callable that
    builds one). Unmatched requests get a 404. Every request is kept
    in ``requests`` for assertions.
    """

    def __init__(self, routes: RouteMap | None = None) -> None:
        self.routes: RouteMap = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        route = self.routes.get(key)
        if route is None:
            return httpx.Response(status_code=404, json={"error": "Not found"})
        if callable(route):
            return route(request)
        return route

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def refuse(request: httpx.Request) -> httpx.Response:
    """Route handler simulating a backend that is not listening."""
    raise httpx.ConnectError("Connection refused", request=request)
