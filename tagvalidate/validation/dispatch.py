"""Late-bound method dispatch through an explicit method table.

Methods are exposed per class at startup; their parameter types are captured
from the signature once. `invoke` then finds a method by name on a target
object and checks the call's arguments against the captured types before
calling it:

    methods = MethodTable()

    @methods.exposes("before_validate", "rename")
    @dataclass
    class User:
        ...

    match methods.invoke(user, "rename", "alice"):
        case Ok(results): ...
        case Err(error): ...

Argument checking is exact: a concretely typed parameter accepts only
arguments whose runtime type is that type. Parameters that are unannotated,
typed `Any`/`object`, a Protocol, an abstract class, or a union/generic alias
behave as interfaces and accept anything.

No failure raises: lookup, argument and call errors all come back as Err.
"""
from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from tagvalidate.core.errors import (
    AppError,
    ErrorCode,
    Ok,
    RegistryError,
    Result,
    argument_mismatch,
    configuration_error,
    method_not_found,
    raise_error,
    unhandled_call,
)
from tagvalidate.core.logging import dispatch_logger

log = dispatch_logger()

C = TypeVar("C", bound=type)


def _is_interface(annotation: Any) -> bool:
    if annotation in (inspect.Parameter.empty, Any, object):
        return True
    if typing.get_origin(annotation) is not None or not isinstance(annotation, type):
        return True
    return getattr(annotation, "_is_protocol", False) or inspect.isabstract(annotation)


def _hints(function: Callable) -> dict[str, Any]:
    try:
        return typing.get_type_hints(function)
    except (NameError, TypeError):
        return {}


@dataclass(frozen=True, slots=True)
class MethodSpec:
    """An exposed method with its argument types captured at registration."""
    owner: type
    name: str
    function: Callable[..., Any]
    parameters: tuple[tuple[str, type | None], ...]
    returns: Any = inspect.Parameter.empty

    @classmethod
    def from_function(cls, owner: type, name: str, function: Callable[..., Any]) -> MethodSpec:
        hints = _hints(function)
        params = list(inspect.signature(function).parameters.values())[1:]  # drop self
        for param in params:
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD, param.KEYWORD_ONLY):
                raise_error(configuration_error(
                    f"Method '{owner.__name__}.{name}' must take positional parameters only",
                    origin="dispatch",
                    method=name,
                ).error, RegistryError)
        parameters = tuple(
            (param.name, None if _is_interface(expected := hints.get(param.name, param.annotation)) else expected)
            for param in params
        )
        return cls(owner, name, function, parameters, hints.get("return", inspect.signature(function).return_annotation))

    def unpack(self, result: Any) -> list[Any]:
        """Return values as an ordered list, following the declared return type."""
        if self.returns in (None, type(None)):
            return []
        if typing.get_origin(self.returns) is tuple and isinstance(result, tuple):
            return list(result)
        return [result]


class MethodTable:
    """Mapping of (class, method name) to exposed methods.

    Like the validator registry, the table is populated at startup and may be
    sealed before concurrent use; it provides no locking of its own.
    """

    def __init__(self) -> None:
        self._methods: dict[tuple[type, str], MethodSpec] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def expose(self, owner: type, name: str) -> None:
        """Expose `owner.name` for dispatch. It must be a plain instance method."""
        if self._sealed:
            raise_error(configuration_error(
                f"Cannot expose '{owner.__name__}.{name}': method table is sealed",
                code=ErrorCode.E7005_REGISTRY_SEALED,
                origin="dispatch",
                method=name,
            ).error, RegistryError)
        function = inspect.getattr_static(owner, name, None)
        if not inspect.isfunction(function):
            raise_error(configuration_error(
                f"'{owner.__name__}.{name}' is not an instance method",
                origin="dispatch",
                method=name,
            ).error, RegistryError)
        self._methods[(owner, name)] = MethodSpec.from_function(owner, name, function)
        log.debug("method_exposed", owner=owner.__name__, method=name)

    def exposes(self, *names: str) -> Callable[[C], C]:
        """Class decorator form of `expose`."""
        def decorator(owner: C) -> C:
            for name in names:
                self.expose(owner, name)
            return owner
        return decorator

    def resolve(self, target: Any, name: str) -> MethodSpec | None:
        """Find the method for `target`, preferring the most-derived class."""
        for klass in type(target).__mro__:
            if (spec := self._methods.get((klass, name))) is not None:
                return spec
        return None

    def has(self, target: Any, name: str) -> bool:
        return self.resolve(target, name) is not None

    def invoke(self, target: Any, name: str, *args: Any) -> Result[list[Any], AppError]:
        """Call `target.name(*args)` and return its results in declared order."""
        if (spec := self.resolve(target, name)) is None:
            log.debug("method_not_found", target=type(target).__name__, method=name)
            return method_not_found(target, name)

        if len(args) != len(spec.parameters):
            return argument_mismatch(name, f"expected {len(spec.parameters)} arguments, got {len(args)}")

        for (param, expected), arg in zip(spec.parameters, args):
            if expected is not None and type(arg) is not expected:
                return argument_mismatch(
                    name, f"parameter '{param}' expects {expected.__name__}, got {type(arg).__name__}"
                )

        try:
            result = spec.function(target, *args)
        except Exception as e:
            log.warning("method_call_failed", target=type(target).__name__, method=name, error=str(e))
            return unhandled_call(name, e)

        return Ok(spec.unpack(result))


methods = MethodTable()


def invoke(target: Any, name: str, *args: Any) -> Result[list[Any], AppError]:
    """Invoke through the process-wide method table."""
    return methods.invoke(target, name, *args)
