# Path: ikea_api/tests/conftest.py
"""
Shared fixtures for the ikea_api test suite.

Every test gets a fresh ConfigLoader with the cache under tmp_path and
console logging off. The network is never touched.
"""

import pytest

from ikea_api import constants
from ikea_api.core.config_loader import ConfigLoader
from ikea_api.engine.coordinator import CatalogCoordinator
from ikea_api.engine.events import EventChannel
from ikea_api.tests.fakes import FakeHTTPHandler


@pytest.fixture(autouse=True)
def config(tmp_path, monkeypatch):
    """Fresh configuration per test, cache under tmp_path."""
    for name in dir(constants):
        if name.startswith('ENV_'):
            monkeypatch.delenv(getattr(constants, name), raising=False)

    monkeypatch.setenv(constants.ENV_CACHE_DIR, str(tmp_path / 'cache'))
    monkeypatch.setenv(constants.ENV_LOG_CONSOLE, 'false')

    ConfigLoader.reset()
    yield ConfigLoader()
    ConfigLoader.reset()


@pytest.fixture
def cache_root(config):
    return config.get('cache_dir')


@pytest.fixture
def handler():
    return FakeHTTPHandler()


@pytest.fixture
def events():
    return EventChannel()


@pytest.fixture
def received(events):
    """Every event emitted on the channel, in order."""
    seen = []
    events.subscribe_all(seen.append)
    return seen


@pytest.fixture
def catalog(config, handler, events):
    return CatalogCoordinator(config, handler=handler, events=events)
