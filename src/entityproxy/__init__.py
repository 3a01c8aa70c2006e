"""
entityproxy - Lazy Entity Handles

Lightweight proxies referencing a record by id. Attributes resolve lazily
through declared methods, memoized getters and finally the record fetched
from a loader found in the proxy context.
"""

from .config import (
    Environment,
    LoggingConfig,
    ProxyConfig,
    configure_logging,
    get_config,
    reset_config,
    set_config,
)
from .core import (
    CachedFailure,
    ConfigurationError,
    ConstructionError,
    EntityProxy,
    NotFoundError,
    ProxyCache,
    ProxyDefinition,
    ProxyError,
    ValidationError,
    create_proxy,
    getter,
    method,
)
from .loaders import EntityLoader, LoaderMetrics, MemoryLoader

__all__ = [
    # Core proxy components
    'EntityProxy',
    'create_proxy',
    'getter',
    'method',
    'ProxyDefinition',
    'ProxyCache',
    'CachedFailure',

    # Errors
    'ProxyError',
    'ValidationError',
    'ConstructionError',
    'ConfigurationError',
    'NotFoundError',

    # Loaders
    'EntityLoader',
    'MemoryLoader',
    'LoaderMetrics',

    # Configuration
    'ProxyConfig',
    'LoggingConfig',
    'Environment',
    'get_config',
    'set_config',
    'reset_config',
    'configure_logging',
]
