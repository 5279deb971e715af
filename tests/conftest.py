"""
Pytest configuration and shared fixtures for simplehttp tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides a SharedClient wired to an in-memory FakeAdapter
3. Provides a localhost server for end-to-end tests
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_fixtures = importlib.import_module("fixtures")
FakeAdapter = _fixtures.FakeAdapter
LocalServer = _fixtures.LocalServer

from simplehttp.config import ClientConfig
from simplehttp.http import RequestFacade, SharedClient, set_shared_client


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def fake_adapter():
    """Adapter answering 200 "hello" to everything."""
    return FakeAdapter(status=200, body=b"hello")


@pytest.fixture
def client(fake_adapter):
    """SharedClient whose http:// and https:// traffic goes to fake_adapter."""
    shared = SharedClient(ClientConfig(max_workers=4))
    shared.mount("http://", fake_adapter)
    shared.mount("https://", fake_adapter)
    yield shared
    shared.close()


@pytest.fixture
def facade(client):
    return RequestFacade(client)


@pytest.fixture
def default_client(client):
    """Install ``client`` as the process-wide client for the module-level helpers."""
    set_shared_client(client)
    yield client
    set_shared_client(None)


@pytest.fixture
def local_server():
    """Threaded HTTP server on an ephemeral localhost port."""
    server = LocalServer().start()
    yield server
    server.stop()


@pytest.fixture
def live_client():
    """SharedClient talking to the real network stack, ignoring proxy env vars."""
    shared = SharedClient(ClientConfig(timeout=5.0, connect_timeout=5.0, max_workers=4))
    shared.session.trust_env = False
    yield shared
    shared.close()
