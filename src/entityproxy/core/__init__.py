"""
entityproxy Core Module

Proxy definition, construction and attribute resolution. Contains no I/O:
records are only ever read through the loader found in the proxy context.
"""

from .cache import CachedFailure, ProxyCache
from .definition import ProxyDefinition, getter, method
from .entity import EntityProxy, create_proxy
from .errors import (
    ConfigurationError,
    ConstructionError,
    NotFoundError,
    ProxyError,
    ValidationError,
)
from .resolver import resolve_attribute

__all__ = [
    "EntityProxy",
    "create_proxy",
    "getter",
    "method",
    "ProxyDefinition",
    "ProxyCache",
    "CachedFailure",
    "resolve_attribute",
    "ProxyError",
    "ValidationError",
    "ConstructionError",
    "ConfigurationError",
    "NotFoundError",
]
