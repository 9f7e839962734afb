"""
Shared fixtures: every test gets its own data directory and fresh settings.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from food_ordering.core import config as core_config
from food_ordering.core.config import get_settings


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """Point DATA_DIRECTORY at a temporary folder and clear cached settings."""
    directory = tmp_path / "data"
    monkeypatch.setenv("DATA_DIRECTORY", str(directory))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("CACHE_TTL_SECONDS", raising=False)
    core_config.get_settings.cache_clear()
    yield directory
    core_config.get_settings.cache_clear()


@pytest.fixture()
def settings(data_dir):
    return get_settings()


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def make_client(data_dir):
    """Factory for app clients; each call is a fresh process start."""
    from food_ordering.main import create_app

    clients = []

    def _make() -> TestClient:
        client = TestClient(create_app())
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in reversed(clients):
        client.__exit__(None, None, None)


@pytest.fixture()
def client(make_client):
    return make_client()
