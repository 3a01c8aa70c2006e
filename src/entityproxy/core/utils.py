from collections.abc import Mapping
from typing import Any


def lookup(container: Any, key: Any, default: Any = None) -> Any:
    """Read ``key`` from a mapping, or the attribute of that name from any other object."""
    if isinstance(container, Mapping):
        return container.get(key, default)
    if not isinstance(key, str):
        return default
    return getattr(container, key, default)
