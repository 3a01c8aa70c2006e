"""
Built-in Proxy Getters and Methods

Default implementations merged into every proxy class before user
declarations, so any of them can be overridden by declaring a getter or
method of the same name.

Getters:
    entity_loader - the loader registered for the proxy entity type
    data_values   - the record fetched through entity_loader
    exists        - whether data_values resolves

Methods:
    assert_exists - await data_values, propagating its failure
    clear_cache   - empty the proxy cache and invalidate the loader entry
"""

import inspect
import logging
from types import MappingProxyType

from ..config import get_config
from .errors import ConfigurationError, NotFoundError
from .utils import lookup

logger = logging.getLogger(__name__)


def entity_loader(self):
    key = get_config().loaders_key
    loaders = lookup(self.context, key)

    if loaders is None:
        raise ConfigurationError(
            f'The proxy context.{key} is not defined. '
            f'Either pass a "{key}" object in the context when instantiating an entity, '
            'or override the default "entity_loader" getter with your own logic.'
        )

    loader = lookup(loaders, self.entity_type)

    if loader is None:
        raise ConfigurationError(
            f'No loader is defined for proxy {self.entity_type}. '
            f'Either make sure context.{key}.{self.entity_type} is defined, '
            'or override the default "entity_loader" getter with your own logic.'
        )

    return loader


async def data_values(self):
    fetch = getattr(self.entity_loader, "fetch", None)

    if not callable(fetch):
        raise ConfigurationError(
            'The proxy entity_loader.fetch should be a function. '
            'Either make sure the "entity_loader" getter returns a loader, '
            'or override the default "data_values" getter with your own logic.'
        )

    record = fetch(self.id)
    if inspect.isawaitable(record):
        record = await record

    if not record:
        raise NotFoundError(self.entity_type, self.id)

    return record


async def read_record(proxy):
    """Resolve ``proxy.data_values``, whether the getter is synchronous or not."""
    record = proxy.data_values
    if inspect.isawaitable(record):
        record = await record
    return record


async def exists(self):
    try:
        await read_record(self)
        return True
    except Exception as e:
        logger.debug(f"{self!r} does not exist: {e}")
        return False


async def assert_exists(self):
    await read_record(self)


def clear_cache(self):
    invalidate = getattr(self.entity_loader, "invalidate", None)

    if not callable(invalidate):
        raise ConfigurationError(
            'The proxy entity_loader.invalidate should be a function. '
            'Either make sure the "entity_loader" getter returns a loader, '
            'or override the default "clear_cache" method with your own logic.'
        )

    self.cache.clear()
    logger.debug(f"Cleared cache of {self!r}")
    return invalidate(self.id)


BUILTIN_GETTERS = MappingProxyType({
    "entity_loader": entity_loader,
    "data_values": data_values,
    "exists": exists,
})

BUILTIN_METHODS = MappingProxyType({
    "assert_exists": assert_exists,
    "clear_cache": clear_cache,
})
