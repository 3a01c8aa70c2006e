"""
Entity Proxies

An entity proxy is a cheap, I/O-free handle on the record identified by an
id. Reading an attribute resolves, in order: instance fields, class
attributes, declared methods, declared getters (memoized per proxy), and
finally a field of the record fetched through the entity loader.

Example:
    ```python
    User = create_proxy(
        entity_type="User",
        getters={"display_name": display_name},
    )

    user = User(46, {"loaders": {"User": user_loader}})
    name = await user.name          # field of the fetched record
    label = await user.display_name # memoized getter
    user.clear_cache()
    ```

The class statement form is equivalent:
    ```python
    class User(EntityProxy, entity_type="User"):
        @getter
        async def display_name(self):
            return f"{await self.name} <{await self.email}>"
    ```
"""

import logging
import types
from typing import Any, ClassVar, Mapping, Optional, Type

from .cache import ProxyCache
from .definition import GETTER, METHOD, ProxyDefinition, collect_declarations
from .errors import ConstructionError
from .resolver import resolve_attribute

logger = logging.getLogger(__name__)


class EntityProxy:
    """Base class for all entity proxies."""

    __proxy_definition__: ClassVar[ProxyDefinition] = ProxyDefinition.build()

    def __init_subclass__(
        cls,
        entity_type: Optional[str] = None,
        getters: Optional[Mapping[str, Any]] = None,
        methods: Optional[Mapping[str, Any]] = None,
        **kwargs,
    ):
        super().__init_subclass__(**kwargs)

        declared = collect_declarations(cls.__dict__)
        own_getters = {**declared[GETTER], **(getters or {})}
        own_methods = {**declared[METHOD], **(methods or {})}

        definition = ProxyDefinition.build(
            entity_type=entity_type,
            getters=own_getters,
            methods=own_methods,
            parent=cls.__proxy_definition__,
        )

        for name in (*declared[GETTER], *declared[METHOD]):
            delattr(cls, name)

        for name in sorted(set(own_getters) | set(own_methods)):
            if hasattr(cls, name):
                logger.warning(
                    f'Declaration "{name}" of proxy {cls.__name__} is shadowed '
                    'by a class attribute and will never be resolved.'
                )

        cls.__proxy_definition__ = definition
        logger.debug(
            f"Defined proxy {cls.__name__} for {definition.entity_type} with "
            f"{len(definition.getters)} getters and {len(definition.methods)} methods"
        )

    def __init__(self, id: Any, context: Optional[Any] = None):
        if id is None:
            raise ConstructionError(
                'Proxy should be instantiated with an id, '
                f'but got: {id}.'
            )

        self._proxy_id = id
        self._proxy_context = {} if context is None else context
        self._proxy_cache = ProxyCache()
        logger.debug(f"Created {self!r}")

    @property
    def id(self) -> Any:
        return self._proxy_id

    @property
    def context(self) -> Any:
        return self._proxy_context

    @property
    def entity_type(self) -> Optional[str]:
        return type(self).__proxy_definition__.entity_type

    @property
    def cache(self) -> ProxyCache:
        return self._proxy_cache

    def __getattr__(self, name: str) -> Any:
        # Internal slots are missing only before __init__ has run
        if name.startswith("_proxy_"):
            raise AttributeError(name)
        return resolve_attribute(self, name)

    def __dir__(self):
        return sorted(set(super().__dir__()) | type(self).__proxy_definition__.declared_names())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.entity_type} id={self._proxy_id!r}>"


def create_proxy(
    entity_type: Optional[str] = None,
    getters: Optional[Mapping[str, Any]] = None,
    methods: Optional[Mapping[str, Any]] = None,
    name: Optional[str] = None,
    base: Type[EntityProxy] = EntityProxy,
) -> Type[EntityProxy]:
    """
    Create a proxy class for one entity type.

    Args:
        entity_type: Tag used to find the loader in ``context.loaders``
        getters: name -> function of the proxy, memoized on first access
        methods: name -> function of the proxy and any arguments, never cached
        name: Class name, defaults to the entity type
        base: Proxy class to extend

    Returns:
        The new proxy class; instantiate it with ``(id, context)``

    Raises:
        ValidationError: If a declaration is rejected
    """
    class_name = name or (entity_type if isinstance(entity_type, str) and entity_type else base.__name__)
    keywords = {"entity_type": entity_type, "getters": getters, "methods": methods}
    return types.new_class(class_name, (base,), keywords)
