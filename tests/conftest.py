"""Pytest configuration and shared fixtures for hyperclient-core tests."""

import pytest

from hyperclient_core import Client
from hyperclient_core.testing import RecordingTransport

BASE_URI = "http://api.example.org"


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential resolution.
    """
    import os

    test_prefixes = ("TEST_", "API_", "CLIENT_", "HYPERCLIENT_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def transport():
    """Recording transport answering every request with an empty 200."""
    return RecordingTransport()


@pytest.fixture
def make_client(transport):
    """Build a client wired to the ``transport`` fixture.

    Extra config keys are merged over ``{"base_uri": BASE_URI}``.
    """
    clients = []

    def _make(**config):
        options = dict(config.pop("transport_options", {}))
        options.setdefault("transport", transport)
        client = Client({"base_uri": BASE_URI, "transport_options": options, **config})
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
