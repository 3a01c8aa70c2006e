"""
Attribute Resolution

Python's own lookup already serves the first tiers of a proxy access:
instance fields (id, context, entity_type, cache and anything set on the
instance) and then class attributes. ``EntityProxy.__getattr__`` only runs
once both miss, and hands over to ``resolve_attribute`` which continues the
chain in a fixed order:

    1. dunder names such as __await__ -> AttributeError
    2. declared methods -> bound to the proxy, never cached
    3. declared getters (built-ins included) -> memoized in the proxy cache
    4. anything else -> field of the fetched record

The tier depends only on the class declarations, never on cache contents.
"""

import functools
import logging
from typing import Any

from .builtins import read_record
from .cache import as_future
from .utils import lookup

logger = logging.getLogger(__name__)


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


async def _project_field(proxy: Any, name: str) -> Any:
    return lookup(await read_record(proxy), name)


def fetch_field(proxy: Any, name: str) -> Any:
    """Future resolving to field ``name`` of the proxy record."""
    logger.debug(f"Falling back to record field {proxy!r}.{name}")
    return as_future(name, _project_field(proxy, name))


def resolve_attribute(proxy: Any, name: str) -> Any:
    # Lookups such as __await__ or __deepcopy__ must not reach the record
    # fallback, or a proxy would pass for an awaitable.
    if is_dunder(name):
        raise AttributeError(f"{type(proxy).__name__!r} object has no attribute {name!r}")

    definition = type(proxy).__proxy_definition__

    method = definition.methods.get(name)
    if method is not None:
        return functools.partial(method, proxy)

    getter = definition.getters.get(name)
    if getter is not None:
        return proxy.cache.resolve(name, getter, proxy)

    return fetch_field(proxy, name)
