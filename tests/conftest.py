"""Pytest fixtures for the EcoScan backend."""

import os

import pytest

# Must be set before main.py is imported: it builds the module-level app.
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("LOG_FILE_PATH", "/tmp/ecoscan_test.log")

from fakes import FakeGeminiService
from main import create_app


@pytest.fixture
def fake_service():
    return FakeGeminiService()


@pytest.fixture
def make_client():
    """Builds a test client around a given fake service and config overrides."""
    def _make(service=None, **config):
        test_config = {"TESTING": True, "RATELIMIT_ENABLED": False}
        test_config.update(config)
        app = create_app(test_config=test_config, gemini_service=service or FakeGeminiService())
        return app.test_client()
    return _make


@pytest.fixture
def client(make_client, fake_service):
    return make_client(fake_service)

