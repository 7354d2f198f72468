"""Pytest configuration and fixtures."""

import httpx
import pytest
from fastapi.testclient import TestClient

from carrier_api.config import Settings
from carrier_api.main import create_app

FMCSA_TEST_URL = "https://fmcsa.test/qc/services/carriers/docket-number"


@pytest.fixture
def settings():
    """Settings pointed at a fake FMCSA host, ignoring any local .env."""
    return Settings(
        _env_file=None,
        fmcsa_base_url=FMCSA_TEST_URL,
        fmcsa_web_key="test-key",
        environment="production",
        log_level="INFO",
    )


@pytest.fixture
def make_client(settings):
    """Build a TestClient whose FMCSA calls are answered by `handler`."""

    def _make(handler, **overrides):
        app = create_app(
            settings.model_copy(update=overrides),
            transport=httpx.MockTransport(handler),
        )
        return TestClient(app, raise_server_exceptions=False)

    return _make


@pytest.fixture
def acme_body():
    return {
        "carrier": {
            "legalName": "Acme Trucking",
            "carrierOperationStatus": "AUTHORIZED",
            "commonAuthorityStatus": "ACTIVE",
            "safetyRating": "Satisfactory",
        }
    }
