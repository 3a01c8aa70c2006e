"""Shared test configuration."""

from unittest.mock import AsyncMock, Mock

import pytest

from entityproxy import reset_config

ENV_VARS = ("ENTITYPROXY_ENV", "ENTITYPROXY_DEBUG", "ENTITYPROXY_LOG_LEVEL", "ENTITYPROXY_LOADERS_KEY")


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from a config rebuilt from a clean environment."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def elon():
    return {"name": "Elon", "email": "elon@spacex.com"}


@pytest.fixture
def spy_loader(elon):
    """Loader double recording fetch and invalidate calls."""
    loader = Mock()
    loader.fetch = AsyncMock(return_value=elon)
    loader.invalidate = Mock()
    return loader
