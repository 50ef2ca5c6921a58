"""Pytest configuration and fixtures for Harmonic MCP tests."""

from __future__ import annotations

import pytest

from packages.core.src.config import HarmonicConfig
from packages.integrations.harmonic.src.client import HarmonicClient
from packages.integrations.harmonic.src.credentials import CredentialStore
from packages.mcp.src.catalog import build_catalog
from packages.mcp.src.dispatcher import ToolDispatcher
from packages.mcp.src.observability import RecordingDispatchObserver
from tests.helpers import MockHarmonicAPI, make_config


@pytest.fixture
def config() -> HarmonicConfig:
    """Default test configuration."""
    return make_config()


@pytest.fixture
def mock_api() -> MockHarmonicAPI:
    """Fresh mock Harmonic API."""
    return MockHarmonicAPI()


@pytest.fixture
def credentials() -> CredentialStore:
    """Empty credential store."""
    return CredentialStore()


@pytest.fixture
def client(config, credentials, mock_api) -> HarmonicClient:
    """Harmonic client wired to the mock API."""
    return HarmonicClient(config, credentials, transport=mock_api.transport)


@pytest.fixture
def observer() -> RecordingDispatchObserver:
    """Observer that keeps dispatch events in memory."""
    return RecordingDispatchObserver()


@pytest.fixture
def dispatcher(config, client, credentials, observer) -> ToolDispatcher:
    """Dispatcher in the UNAUTHENTICATED phase."""
    return ToolDispatcher(client, credentials, build_catalog(config), observer=observer)
