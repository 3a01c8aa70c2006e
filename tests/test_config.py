"""Configuration and logging setup."""

import logging

import pytest

from entityproxy import (
    Environment,
    ProxyConfig,
    configure_logging,
    get_config,
    reset_config,
    set_config,
)


class TestProxyConfig:

    def test_defaults(self):
        config = ProxyConfig()

        assert config.environment == Environment.DEVELOPMENT
        assert config.loaders_key == "loaders"
        assert config.logging.level == "INFO"

    @pytest.mark.parametrize("environment, level, debug", [
        (Environment.DEVELOPMENT, "DEBUG", True),
        (Environment.TESTING, "WARNING", False),
        (Environment.PRODUCTION, "INFO", False),
    ])
    def test_for_environment(self, environment, level, debug):
        config = ProxyConfig.for_environment(environment)

        assert config.logging.level == level
        assert config.debug is debug

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("ENTITYPROXY_ENV", "production")
        monkeypatch.setenv("ENTITYPROXY_DEBUG", "true")
        monkeypatch.setenv("ENTITYPROXY_LOG_LEVEL", "error")
        monkeypatch.setenv("ENTITYPROXY_LOADERS_KEY", "dataloaders")

        config = ProxyConfig.from_environment()

        assert config.environment == Environment.PRODUCTION
        assert config.debug is True
        assert config.logging.level == "ERROR"
        assert config.loaders_key == "dataloaders"

    def test_from_dict_and_back(self):
        config = ProxyConfig.from_dict({
            "environment": "testing",
            "loaders_key": "sources",
            "logging": {"level": "DEBUG", "unknown": 1},
        })

        assert config.to_dict() == {
            "environment": "testing",
            "debug": False,
            "loaders_key": "sources",
            "logging": {"level": "DEBUG", "format": config.logging.format},
        }

    def test_rejects_unknown_environment(self):
        with pytest.raises(ValueError):
            ProxyConfig.from_dict({"environment": "moon"})


class TestGlobalConfig:

    def test_get_config_reads_environment_lazily(self, monkeypatch):
        monkeypatch.setenv("ENTITYPROXY_LOADERS_KEY", "sources")
        reset_config()

        assert get_config().loaders_key == "sources"
        assert get_config() is get_config()

    def test_set_config(self):
        config = ProxyConfig(loaders_key="custom")
        set_config(config)

        assert get_config() is config


class TestConfigureLogging:

    def test_is_idempotent(self):
        logger = logging.getLogger("entityproxy")
        before = list(logger.handlers)

        try:
            configure_logging(ProxyConfig.for_environment(Environment.TESTING))
            configure_logging(ProxyConfig.for_environment(Environment.DEVELOPMENT))

            added = [handler for handler in logger.handlers if handler not in before]
            assert len(added) == 1
            assert logger.level == logging.DEBUG
        finally:
            for handler in logger.handlers[:]:
                if handler not in before:
                    logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
