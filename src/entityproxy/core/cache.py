"""
Proxy Cache - Single-Flight Getter Memoization

Each proxy owns one ProxyCache. A slot is either unset, a cached value
(a future when the getter was asynchronous) or a cached failure. The first
access stores the getter result before any awaiting happens, so concurrent
readers share one future and the getter body runs once per slot until the
cache is cleared.
"""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedFailure:
    """Exception raised by a synchronous getter, kept until invalidation"""
    error: BaseException


def as_future(name: str, value: Any) -> "asyncio.Future":
    """Schedule an awaitable on the running loop so it can be awaited many times."""
    if asyncio.isfuture(value):
        return value

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(value):
            value.close()
        raise RuntimeError(
            f'Proxy attribute "{name}" is asynchronous, but no event loop is running.'
        ) from None

    return asyncio.ensure_future(value, loop=loop)


class ProxyCache(Mapping):
    """Read-only mapping view over memoized getter results."""

    def __init__(self):
        self._slots: Dict[str, Any] = {}

    def resolve(self, name: str, getter: Callable[[Any], Any], proxy: Any) -> Any:
        """Return the memoized result of ``getter(proxy)``, computing it on first access."""
        if name not in self._slots:
            logger.debug(f"Cache miss for {proxy!r}.{name}")
            try:
                value = getter(proxy)
            except Exception as error:
                self._slots[name] = CachedFailure(error)
                raise

            if inspect.isawaitable(value):
                value = as_future(name, value)
            self._slots[name] = value
            return value

        entry = self._slots[name]
        if isinstance(entry, CachedFailure):
            raise entry.error
        return entry

    def clear(self) -> None:
        """Drop every slot. In-flight futures are left to settle unobserved."""
        self._slots = {}

    def __getitem__(self, name: str) -> Any:
        return self._slots[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"ProxyCache({sorted(self._slots)})"
