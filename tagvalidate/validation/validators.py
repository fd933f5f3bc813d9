"""Built-in Validators

Each validator takes the field's context and the directive's string options
and returns Ok(None) or Err(AppError). Dispatch is an exhaustive match over
the normalized value kinds with an explicit unsupported arm.

Ordering rules shared by every validator:
- Arity is checked before anything else; the value is never inspected when
  the option count is wrong.
- For validators with a numeric option, the option is parsed before the
  value's kind is considered.

Messages keep `{field}`/`{struct}` placeholders; the engine fills them in.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Sequence

from tagvalidate.core.errors import (
    AppError,
    Ok,
    Result,
    cannot_be_empty,
    invalid_format,
    out_of_range,
    requires_single_argument,
    takes_no_arguments,
    unparsable_argument,
    unsupported_type,
)

from .context import ValidatorContext
from .values import FloatValue, IntValue, StrValue, runtime_type

if TYPE_CHECKING:
    from .registry import ValidatorRegistry

_INTEGER = re.compile(r"[+-]?[0-9]+")

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


def parse_int(text: str, low: int = INT64_MIN, high: int = INT64_MAX) -> int | None:
    """Strict base-10 parse: optional sign, ASCII digits, no whitespace or underscores."""
    if not _INTEGER.fullmatch(text):
        return None
    number = int(text)
    return number if low <= number <= high else None


def _unsupported(name: str, ctx: ValidatorContext) -> Result[None, AppError]:
    return unsupported_type(name, runtime_type(ctx.value))


def is_empty(ctx: ValidatorContext, options: Sequence[str]) -> Result[None, AppError]:
    """An empty value is acceptable and ends the field's chain."""
    if options:
        return takes_no_arguments("empty")

    match ctx.value:
        case StrValue(text):
            if ctx.is_nil or not text:
                ctx.stop_validate = True
            return Ok(None)
        case IntValue(number):
            if ctx.is_nil or number == 0:
                ctx.stop_validate = True
            return Ok(None)
        case _ if ctx.is_nil:
            ctx.stop_validate = True
            return Ok(None)
        case _:
            return _unsupported("empty", ctx)


def is_not_empty(ctx: ValidatorContext, options: Sequence[str]) -> Result[None, AppError]:
    if options:
        return takes_no_arguments("not_empty")

    match ctx.value:
        case StrValue(text):
            return cannot_be_empty("not_empty") if ctx.is_nil or not text else Ok(None)
        case IntValue(number) | FloatValue(number):
            # 0.0 counts as empty, same as integer zero
            return cannot_be_empty("not_empty") if ctx.is_nil or number == 0 else Ok(None)
        case _ if ctx.is_nil:
            return cannot_be_empty("not_empty")
        case _:
            return _unsupported("not_empty", ctx)


def is_min(ctx: ValidatorContext, options: Sequence[str]) -> Result[None, AppError]:
    if len(options) != 1:
        return requires_single_argument("min")
    if (limit := parse_int(options[0])) is None:
        return unparsable_argument("min", options[0])

    match ctx.value:
        case StrValue(text):
            if ctx.is_nil or len(text) < limit:
                return out_of_range(f"{{field}} cannot be shorter than {limit} characters.", "min", limit)
            return Ok(None)
        case IntValue(number) | FloatValue(number):
            if ctx.is_nil or number < limit:
                return out_of_range(f"{{field}} cannot be less than {limit}.", "min", limit)
            return Ok(None)
        case _:
            return _unsupported("min", ctx)


def is_max(ctx: ValidatorContext, options: Sequence[str]) -> Result[None, AppError]:
    """Nil values never exceed the limit."""
    if len(options) != 1:
        return requires_single_argument("max")
    if (limit := parse_int(options[0])) is None:
        return unparsable_argument("max", options[0])

    match ctx.value:
        case StrValue(text):
            if not ctx.is_nil and len(text) > limit:
                return out_of_range(f"{{field}} is longer than {limit} characters.", "max", limit)
            return Ok(None)
        case IntValue(number) | FloatValue(number):
            if not ctx.is_nil and number > limit:
                return out_of_range(f"{{field}} cannot be greater than {limit}.", "max", limit)
            return Ok(None)
        case _:
            return _unsupported("max", ctx)


def is_lower_case(ctx: ValidatorContext, options: Sequence[str]) -> Result[None, AppError]:
    if options:
        return takes_no_arguments("lowercase")

    match ctx.value:
        case StrValue(text):
            if ctx.is_nil or not text:
                return Ok(None)
            for char in text:
                if char.isalpha() and not char.islower():
                    return invalid_format("{field} must be in lower case.", "lowercase")
            return Ok(None)
        case _:
            return _unsupported("lowercase", ctx)


def is_upper_case(ctx: ValidatorContext, options: Sequence[str]) -> Result[None, AppError]:
    if options:
        return takes_no_arguments("uppercase")

    match ctx.value:
        case StrValue(text):
            if ctx.is_nil or not text:
                return Ok(None)
            for char in text:
                if char.isalpha() and not char.isupper():
                    return invalid_format("{field} must be in upper case.", "uppercase")
            return Ok(None)
        case _:
            return _unsupported("uppercase", ctx)


def is_numeric(ctx: ValidatorContext, options: Sequence[str]) -> Result[None, AppError]:
    """Check the string holds a 32-bit integer and coerce the context value to it.

    Later directives in the same chain (`min`, `max`) then compare numerically,
    so `numeric,min:1,max:100` bounds the number rather than the string length.
    """
    if options:
        return takes_no_arguments("numeric")

    match ctx.value:
        case StrValue(text):
            if ctx.is_nil or not text:
                return invalid_format("{field} must be numeric.", "numeric")
            if (number := parse_int(text, INT32_MIN, INT32_MAX)) is None:
                return invalid_format("{field} must contain numbers only.", "numeric")
            ctx.value = IntValue(number)
            return Ok(None)
        case _:
            return _unsupported("numeric", ctx)


BUILTIN_VALIDATORS = {
    "empty": is_empty,
    "not_empty": is_not_empty,
    "min": is_min,
    "max": is_max,
    "lowercase": is_lower_case,
    "uppercase": is_upper_case,
    "numeric": is_numeric,
}


def register_default_validators(registry: ValidatorRegistry) -> None:
    """Register the built-in set. Runs once, before any validation pass."""
    for name, validator in BUILTIN_VALIDATORS.items():
        registry.register(name, validator)
