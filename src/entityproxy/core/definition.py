"""
Proxy Class Definitions

A ProxyDefinition is the immutable accessor table of one proxy class: its
entity type plus the merged getter and method tables. Tables are merged once
per class, built-ins first, then inherited declarations, then the class own
declarations, so a user declaration always shadows a built-in of the same name.

The ``@getter`` and ``@method`` decorators only mark functions in a class
body; ``EntityProxy.__init_subclass__`` moves them into the tables.
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .builtins import BUILTIN_GETTERS, BUILTIN_METHODS
from .errors import ValidationError
from .validation import validate_definition, validate_getters, validate_methods

logger = logging.getLogger(__name__)

GETTER = "getter"
METHOD = "method"


class ProxyDefinition(BaseModel):
    """Frozen accessor table shared by every instance of a proxy class."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    entity_type: Optional[str] = None
    getters: Mapping[str, Any] = Field(default_factory=dict)
    methods: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("getters", "methods", mode="after")
    @classmethod
    def _freeze(cls, table: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(table))

    @classmethod
    def build(
        cls,
        entity_type: Optional[str] = None,
        getters: Optional[Mapping[str, Any]] = None,
        methods: Optional[Mapping[str, Any]] = None,
        parent: Optional['ProxyDefinition'] = None,
    ) -> 'ProxyDefinition':
        """
        Validate declarations and merge them over the parent tables.

        Args:
            entity_type: Entity type tag, inherited from the parent when None
            getters: Getter declarations, name -> function of the proxy
            methods: Method declarations, name -> function of the proxy and any arguments
            parent: Definition of the parent proxy class, if any

        Returns:
            A frozen definition; the caller tables are left untouched
        """
        getters = getters or {}
        methods = methods or {}
        validate_definition(entity_type, getters, methods)

        base_getters = parent.getters if parent else BUILTIN_GETTERS
        base_methods = parent.methods if parent else BUILTIN_METHODS

        return cls(
            entity_type=entity_type if entity_type is not None else (parent.entity_type if parent else None),
            getters={**base_getters, **getters},
            methods={**base_methods, **methods},
        )

    def declared_names(self):
        """All names served by the method and getter tiers."""
        return set(self.methods) | set(self.getters)


def _mark(kind: str, fn: Any) -> Callable:
    name = getattr(fn, "__name__", repr(fn))
    if kind == GETTER:
        validate_getters({name: fn})
    else:
        validate_methods({name: fn})

    try:
        fn._proxy_declaration = kind
    except AttributeError:
        raise ValidationError(
            f'Proxy {kind}s declared with @{kind} should be plain functions, '
            f'but {kind} "{name}" is of type {type(fn).__name__}.'
        ) from None
    return fn


def getter(fn: Callable) -> Callable:
    """Mark a function of the proxy as a memoized getter."""
    return _mark(GETTER, fn)


def method(fn: Callable) -> Callable:
    """Mark a function of the proxy as an uncached method."""
    return _mark(METHOD, fn)


def collect_declarations(namespace: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Split ``@getter``/``@method`` marked members out of a class namespace."""
    declarations: Dict[str, Dict[str, Any]] = {GETTER: {}, METHOD: {}}
    for name, value in namespace.items():
        # Read the instance dict so proxies stored as class attributes never hit their fallback
        kind = getattr(value, "__dict__", {}).get("_proxy_declaration")
        if kind in declarations:
            declarations[kind][name] = value
    return declarations
