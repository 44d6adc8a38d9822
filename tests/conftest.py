# tests/conftest.py
import os

import pytest
import pytest_asyncio

from navkit.shared.core.configuration import ENV_MAP
from navkit.shared.core.result_bus import ResultBus
from navkit.shared.core.service_registry import clear_coordinators
from navkit.shared.navigation import (
    NavigationCoordinator,
    NavigationDestination,
    NavigationStack,
    Route,
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Keep NAVKIT_* variables from the developer's shell out of tests."""
    for key in ENV_MAP:
        if key in os.environ:
            monkeypatch.delenv(key)
    yield
    clear_coordinators()


@pytest.fixture
def bus():
    return ResultBus()


@pytest.fixture
def stack():
    """Assets list with an asset detail on top (depth 2)."""
    stack = NavigationStack(root=Route(destination=NavigationDestination.ASSETS_LIST))
    stack.push(Route(destination=NavigationDestination.ASSET_DETAIL, argument="1"))
    return stack


@pytest_asyncio.fixture
async def coordinator(bus, stack):
    coordinator = NavigationCoordinator(bus, stack)
    await coordinator.start()
    yield coordinator
    await coordinator.stop()
