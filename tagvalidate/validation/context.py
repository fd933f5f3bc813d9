"""Validator execution context."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from tagvalidate.core.errors import AppError, Result

from .values import NormalizedValue, Value


@dataclass(slots=True)
class ValidatorContext:
    """Per-field state handed to every validator in a directive chain.

    `value` is a single mutable slot: a validator may replace it (``numeric``
    swaps a StrValue for the parsed IntValue) and every later validator in the
    same chain sees the replacement. `stop_validate` is an out-flag; once set,
    the remaining directives for the field are skipped without error.
    """
    value: Value
    is_nil: bool = False
    stop_validate: bool = False

    @classmethod
    def from_normalized(cls, normalized: NormalizedValue) -> ValidatorContext:
        return cls(value=normalized.value, is_nil=normalized.is_nil)


ValidatorFunc = Callable[[ValidatorContext, Sequence[str]], Result[None, AppError]]
