"""Unit tests for logging configuration."""

import logging

import pytest
import structlog

from packages.core.src.config import AuthScheme
from packages.core.src.logging_setup import QUIET_LOGGERS, configure_logging
from packages.integrations.harmonic.src.client import HarmonicClient
from packages.integrations.harmonic.src.credentials import CredentialStore
from tests.helpers import MockHarmonicAPI, make_config

API_KEY = "SECRET-FULL-KEY-123456"


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_http_loggers_quieted(self):
        """httpx and httpcore only log warnings and above."""
        configure_logging(make_config(log_level="DEBUG"))

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    @pytest.mark.asyncio
    async def test_query_key_not_logged(self, caplog):
        """A key sent as a query parameter never reaches the logs."""
        caplog.set_level(logging.INFO)
        config = make_config(log_level="INFO", auth_scheme=AuthScheme.APIKEY_QUERY)
        configure_logging(config)

        mock_api = MockHarmonicAPI()
        mock_api.add("GET", "/companies", json=[])
        store = CredentialStore()
        store.set(API_KEY)
        client = HarmonicClient(config, store, transport=mock_api.transport)

        try:
            await client.search_companies("acme")
        finally:
            await client.close()

        assert mock_api.last_request.url.params["apikey"] == API_KEY
        assert API_KEY not in caplog.text
