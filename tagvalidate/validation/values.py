"""Normalized Value Variant

Validators never see raw field values. Each value is first normalized into a
closed set of kinds so validators can pattern-match exhaustively:

    StrValue | IntValue | FloatValue | NilValue | OpaqueValue

`NilValue` is a nil whose kind is unknown; a nil whose kind is known from the
field's annotation becomes the zero value of that kind with `is_nil=True`.
`OpaqueValue` wraps anything the engine has no validator logic for.
"""
from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin


@dataclass(frozen=True, slots=True)
class StrValue:
    value: str


@dataclass(frozen=True, slots=True)
class IntValue:
    value: int


@dataclass(frozen=True, slots=True)
class FloatValue:
    value: float


@dataclass(frozen=True, slots=True)
class NilValue:
    pass


@dataclass(frozen=True, slots=True)
class OpaqueValue:
    value: Any


Value = StrValue | IntValue | FloatValue | NilValue | OpaqueValue


@dataclass(frozen=True, slots=True)
class NormalizedValue:
    """A field value reduced to an engine kind plus an explicit nil flag."""
    value: Value
    is_nil: bool = False


_ZERO_BY_KIND: dict[type, Value] = {
    str: StrValue(""),
    int: IntValue(0),
    float: FloatValue(0.0),
}


def _nil_kind(declared_type: Any) -> type | None:
    """Resolve `str`, `int` or `float` from an annotation such as `Optional[int]`."""
    if declared_type in _ZERO_BY_KIND:
        return declared_type
    if get_origin(declared_type) in (Union, types.UnionType):
        kinds = [arg for arg in get_args(declared_type) if arg is not type(None)]
        if len(kinds) == 1 and kinds[0] in _ZERO_BY_KIND:
            return kinds[0]
    return None


def normalize(raw: Any, declared_type: Any = None) -> NormalizedValue:
    """Convert a raw field value into its normalized form.

    bool is deliberately opaque: it is an int subclass, but no validator treats
    True/False as numbers.
    """
    if raw is None:
        kind = _nil_kind(declared_type)
        return NormalizedValue(_ZERO_BY_KIND[kind] if kind else NilValue(), is_nil=True)
    if isinstance(raw, bool):
        return NormalizedValue(OpaqueValue(raw))
    if isinstance(raw, str):
        return NormalizedValue(StrValue(raw))
    if isinstance(raw, int):
        return NormalizedValue(IntValue(raw))
    if isinstance(raw, float):
        return NormalizedValue(FloatValue(raw))
    return NormalizedValue(OpaqueValue(raw))


def runtime_type(value: Value) -> str:
    """Name of the concrete type behind a normalized value, for error metadata."""
    match value:
        case NilValue():
            return "NoneType"
        case OpaqueValue(inner):
            return type(inner).__name__
        case StrValue() | IntValue() | FloatValue():
            return type(value.value).__name__
