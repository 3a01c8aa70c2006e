"""
Proxy Declaration Validation

Checks getter and method tables once per class definition. Getters and
methods receive the proxy explicitly as their first positional argument, so
every declaration must be an unbound callable able to accept it. Getters
must not require anything else.

The tables are only inspected, never modified.
"""

import functools
import inspect
from typing import Any, Callable, Mapping, Optional

from .errors import ValidationError

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _signature(callback: Callable) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(callback)
    except (TypeError, ValueError):
        # Some C callables expose no signature
        return None


def _is_prebound(callback: Callable) -> bool:
    """Whether the callable already carries its own receiver."""
    if inspect.ismethod(callback):
        return True
    return isinstance(callback, functools.partial) and bool(callback.args)


def _accepts_receiver(signature: inspect.Signature) -> bool:
    for parameter in signature.parameters.values():
        if parameter.kind in _POSITIONAL or parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            return True
    return False


def _extra_arity(signature: inspect.Signature) -> int:
    """Count required parameters besides the receiver, like JS Function.length."""
    parameters = list(signature.parameters.values())
    if parameters and parameters[0].kind in _POSITIONAL:
        parameters = parameters[1:]

    return sum(
        1 for parameter in parameters
        if parameter.kind not in _VARIADIC and parameter.default is inspect.Parameter.empty
    )


def _validate_callable(kind: str, name: str, callback: Any, declaration: str) -> Optional[inspect.Signature]:
    if not callable(callback):
        raise ValidationError(
            f'Proxy {kind}s should be functions, '
            f'but {kind} "{name}" is of type {type(callback).__name__}.'
        )

    if _is_prebound(callback):
        raise ValidationError(
            f'Proxy {kind}s should not be bound methods, but {kind} "{name}" is. '
            f'Replace its declaration with "{declaration}" '
            'in order to enable proxy binding.'
        )

    signature = _signature(callback)
    if signature is not None and not _accepts_receiver(signature):
        raise ValidationError(
            f'Proxy {kind}s should accept the proxy as their first argument, '
            f'but {kind} "{name}" accepts no positional argument. '
            f'Replace its declaration with "{declaration}".'
        )
    return signature


def validate_getters(getters: Mapping[str, Any]) -> None:
    """Reject getters that are not plain zero-argument functions of the proxy."""
    for name, callback in getters.items():
        signature = _validate_callable("getter", name, callback, f"def {name}(self): ...")

        if signature is None:
            continue

        arity = _extra_arity(signature)
        if arity:
            raise ValidationError(
                'Proxy getters should not accept any arguments, '
                f'but getter "{name}" accepts {arity} argument(s).'
            )


def validate_methods(methods: Mapping[str, Any]) -> None:
    """Reject methods that cannot be bound to the proxy. Any arity is allowed."""
    for name, callback in methods.items():
        _validate_callable("method", name, callback, f"def {name}(self, ...): ...")


def validate_definition(entity_type: Any, getters: Mapping[str, Any], methods: Mapping[str, Any]) -> None:
    """Validate a complete class definition input."""
    if entity_type is not None and not isinstance(entity_type, str):
        raise ValidationError(
            f'Proxy entity_type should be a string, but got {type(entity_type).__name__}.'
        )

    validate_getters(getters)
    validate_methods(methods)
