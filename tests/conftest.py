"""Shared test fixtures for burp-mcp."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import pytest

from burp_mcp.backend.client import BurpClient
from burp_mcp.config.schema import BackendConfig
from burp_mcp.tools.dispatcher import Dispatcher
from tests.fixtures.burp import FakeBurp, RouteMap

BURP_URL = "http://burp.test:1337"

MakeDispatcher = Callable[..., tuple[Dispatcher, FakeBurp]]


@pytest.fixture
def backend_config() -> BackendConfig:
    return BackendConfig(base_url=BURP_URL)


@pytest.fixture
async def make_dispatcher(backend_config: BackendConfig) -> AsyncIterator[MakeDispatcher]:
    """Factory fixture: a Dispatcher wired to a fresh FakeBurp.

    Every dispatcher handed out is closed at teardown.
    """
    made: list[Dispatcher] = []

    def _make(routes: RouteMap | None = None) -> tuple[Dispatcher, FakeBurp]:
        fake = FakeBurp(routes)
        client = BurpClient(backend_config, transport=fake.transport)
        dispatcher = Dispatcher(backend_config, client=client)
        made.append(dispatcher)
        return dispatcher, fake

    yield _make
    for dispatcher in made:
        await dispatcher.aclose()
