"""
entityproxy Loaders - Memory Backend

In-memory loader implementation for development and testing.
"""

import asyncio
import functools
import logging
import time
from typing import Any, Dict, Mapping, Optional

from .base import EntityLoader, LoaderMetrics

logger = logging.getLogger(__name__)


class MemoryLoader(EntityLoader):
    """
    In-memory entity loader.

    Records live in a dict, optionally with a time-to-live. Fetches are
    memoized per id and per event loop: concurrent and repeated fetches of
    one id share a single read until ``invalidate`` is called for it or the
    record expires. Reads that miss or fail are not memoized.
    """

    def __init__(self, records: Optional[Mapping[Any, Any]] = None):
        self._data: Dict[Any, Any] = dict(records or {})
        self._expiry: Dict[Any, float] = {}
        self._futures: Dict[Any, asyncio.Future] = {}
        self.metrics = LoaderMetrics()

    def save(self, entity_id: Any, record: Any, ttl: Optional[int] = None) -> bool:
        """Store a record, optionally expiring after ``ttl`` seconds."""
        self._data[entity_id] = record
        self._futures.pop(entity_id, None)
        if ttl:
            self._expiry[entity_id] = time.time() + ttl
        else:
            self._expiry.pop(entity_id, None)
        return True

    def delete(self, entity_id: Any) -> bool:
        """Remove a record and any memoized fetch of it."""
        existed = entity_id in self._data
        self._data.pop(entity_id, None)
        self._expiry.pop(entity_id, None)
        self._futures.pop(entity_id, None)
        return existed

    async def fetch(self, entity_id: Any) -> Optional[Any]:
        self.metrics.fetches += 1

        future = self._futures.get(entity_id)
        if future is not None and (
            self._is_expired(entity_id) or future.get_loop() is not asyncio.get_running_loop()
        ):
            self._futures.pop(entity_id, None)
            future = None

        if future is None:
            future = asyncio.ensure_future(self._read(entity_id))
            self._futures[entity_id] = future
            future.add_done_callback(functools.partial(self._forget_miss, entity_id))
        else:
            self.metrics.cache_hits += 1

        # One cancelled caller must not cancel the read shared with others
        return await asyncio.shield(future)

    async def _read(self, entity_id: Any) -> Optional[Any]:
        self.metrics.reads += 1

        if self._is_expired(entity_id):
            self._data.pop(entity_id, None)
            self._expiry.pop(entity_id, None)
            return None

        return self._data.get(entity_id)

    def _forget_miss(self, entity_id: Any, future: asyncio.Future) -> None:
        if self._futures.get(entity_id) is not future:
            return
        if future.cancelled() or future.exception() is not None or future.result() is None:
            del self._futures[entity_id]

    def prime(self, entity_id: Any, record: Any) -> bool:
        """
        Seed a record as if it had already been fetched.

        Does nothing when a fetch of the id is already memoized. The next
        fetch is served without a read.
        """
        if entity_id in self._futures:
            return False

        self._data[entity_id] = record
        self._expiry.pop(entity_id, None)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Without a loop the record alone is stored; the first fetch reads it
            return True

        future = loop.create_future()
        future.set_result(record)
        self._futures[entity_id] = future
        return True

    def invalidate(self, entity_id: Any) -> None:
        self.metrics.invalidations += 1
        self._futures.pop(entity_id, None)
        logger.debug(f"Invalidated {entity_id!r}")

    def invalidate_all(self) -> None:
        """Forget every memoized fetch."""
        self.metrics.invalidations += len(self._futures)
        self._futures.clear()

    def cleanup_expired(self) -> int:
        """Drop expired records, returning how many were removed."""
        expired_keys = [key for key in self._expiry if self._is_expired(key)]

        for key in expired_keys:
            self.delete(key)

        if expired_keys:
            logger.info(f"{self.__class__.__name__}: Cleaned up {len(expired_keys)} expired records")
        return len(expired_keys)

    def _is_expired(self, entity_id: Any) -> bool:
        return entity_id in self._expiry and time.time() > self._expiry[entity_id]

    def __contains__(self, entity_id: Any) -> bool:
        return entity_id in self._data and not self._is_expired(entity_id)

    def __len__(self) -> int:
        return len(self._data)
