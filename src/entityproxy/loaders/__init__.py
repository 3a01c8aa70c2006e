"""
entityproxy Loaders Module

Loader contract and reference implementations. Production loaders
(batching, remote caching) only need to honour the same contract.
"""

from .base import EntityLoader, LoaderMetrics
from .memory import MemoryLoader

__all__ = [
    "EntityLoader",
    "LoaderMetrics",
    "MemoryLoader",
]
