"""
Configuration Management for entityproxy

Environment-aware settings for the proxy core: where loaders live in the
proxy context and how the package logs.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Environment(Enum):
    """Runtime environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ProxyConfig:
    """Complete proxy configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    loaders_key: str = "loaders"
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'ProxyConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.logging.level = "DEBUG"
        elif environment == Environment.TESTING:
            config.logging.level = "WARNING"
        elif environment == Environment.PRODUCTION:
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ProxyConfig':
        """Create configuration from dictionary"""
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        config = cls.for_environment(environment)

        if "debug" in config_dict:
            config.debug = bool(config_dict["debug"])

        if "loaders_key" in config_dict:
            config.loaders_key = config_dict["loaders_key"]

        for key, value in config_dict.get("logging", {}).items():
            if hasattr(config.logging, key):
                setattr(config.logging, key, value)

        return config

    @classmethod
    def from_environment(cls) -> 'ProxyConfig':
        """Create configuration from environment variables"""
        environment = Environment(os.getenv('ENTITYPROXY_ENV', 'development'))
        config = cls.for_environment(environment)

        if os.getenv('ENTITYPROXY_DEBUG'):
            config.debug = os.getenv('ENTITYPROXY_DEBUG').lower() == 'true'

        if os.getenv('ENTITYPROXY_LOG_LEVEL'):
            config.logging.level = os.getenv('ENTITYPROXY_LOG_LEVEL').upper()

        if os.getenv('ENTITYPROXY_LOADERS_KEY'):
            config.loaders_key = os.getenv('ENTITYPROXY_LOADERS_KEY')

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "loaders_key": self.loaders_key,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
            },
        }


# Global configuration management
_current_config: Optional[ProxyConfig] = None


def set_config(config: ProxyConfig):
    """Set the global configuration"""
    global _current_config
    _current_config = config


def get_config() -> ProxyConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        _current_config = ProxyConfig.from_environment()

    return _current_config


def reset_config():
    """Forget the global configuration so the next read rebuilds it from the environment"""
    global _current_config
    _current_config = None


def configure_logging(config: Optional[ProxyConfig] = None) -> logging.Logger:
    """Attach a stream handler to the package logger according to config."""
    config = config or get_config()
    logger = logging.getLogger("entityproxy")
    logger.setLevel(config.logging.level)

    handler = next((h for h in logger.handlers if getattr(h, "_entityproxy", False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._entityproxy = True
        logger.addHandler(handler)

    handler.setFormatter(logging.Formatter(config.logging.format))
    return logger
