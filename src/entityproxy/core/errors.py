"""
Entity Proxy Errors

Exception taxonomy for proxy definition, construction and resolution.
Definition and construction errors are raised eagerly; configuration and
not-found errors only surface on the attribute access that needs them.
"""

from typing import Any, Optional


class ProxyError(Exception):
    """Base exception for entity proxy failures"""
    pass


class ValidationError(ProxyError):
    """Raised when a getter or method declaration is rejected at class definition"""
    pass


class ConstructionError(ProxyError):
    """Raised when a proxy is instantiated without an id"""
    pass


class ConfigurationError(ProxyError):
    """Raised when the context or loader cannot serve a built-in getter or method"""
    pass


class NotFoundError(ProxyError, LookupError):
    """Raised when the loader yields no record for the proxy id"""

    def __init__(self, entity_type: Optional[str], entity_id: Any):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f'Entity {entity_type} with id "{entity_id}" does not exist.')
