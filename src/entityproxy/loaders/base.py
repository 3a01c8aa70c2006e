"""
entityproxy Loaders - Base Classes

Abstract contract of the loader collaborator a proxy reads its record from.
Proxies only need ``fetch``; ``invalidate`` is required by ``clear_cache``.
Any object with these callables works, subclassing is optional.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


@dataclass
class LoaderMetrics:
    """Counters collected by loader implementations"""
    fetches: int = 0
    reads: int = 0
    cache_hits: int = 0
    invalidations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary"""
        return {
            "fetches": self.fetches,
            "reads": self.reads,
            "cache_hits": self.cache_hits,
            "cache_hit_rate": self.cache_hits / max(self.fetches, 1),
            "invalidations": self.invalidations,
        }


class EntityLoader(ABC):
    """
    Abstract base class for entity loaders.

    Implementations own batching, deduplication and caching across proxies;
    a proxy calls ``fetch`` at most once per id until its cache is cleared.
    """

    @abstractmethod
    async def fetch(self, entity_id: Any) -> Optional[Any]:
        """
        Fetch the record of an entity.

        Args:
            entity_id: Unique identifier for the entity

        Returns:
            The record if found, None (or any falsy value) otherwise
        """
        pass

    @abstractmethod
    def invalidate(self, entity_id: Any) -> None:
        """
        Forget any cached record of an entity.

        Args:
            entity_id: Unique identifier for the entity
        """
        pass

    async def fetch_many(self, entity_ids: Iterable[Any]) -> List[Optional[Any]]:
        """Fetch several records concurrently, in the order of ``entity_ids``."""
        return list(await asyncio.gather(*(self.fetch(entity_id) for entity_id in entity_ids)))
