"""Tag-Driven Validation

Fields declare their validation directives in metadata; a validation pass
walks the record, runs each field's directive chain and collects failures
keyed by dotted field path.

Key Features:
- Directive tags (`"not_empty,min:3,max:20"`) on dataclass and pydantic fields
- Closed value variant (str | int | float | nil | opaque) for validator dispatch
- Stop-flag short circuit and in-chain value coercion (`numeric,min:1`)
- Two-phase validator registry (register at startup, sealed for passes)
- Explicit method table for late-bound method dispatch and lifecycle hooks
- Fail-fast or collect-all error accumulation

Usage:
    from dataclasses import dataclass, field
    from tagvalidate.validation import TagValidator, ValidationError

    @dataclass
    class Signup:
        username: str = field(metadata={"validate": "not_empty,lowercase,max:20"})
        age: str = field(metadata={"validate": "numeric,min:13"})

    try:
        TagValidator().validate(Signup(username="Bob", age="9"))
    except ValidationError as e:
        e.field_errors  # {"username": [...], "age": [...]}
"""

from .values import (
    StrValue,
    IntValue,
    FloatValue,
    NilValue,
    OpaqueValue,
    Value,
    NormalizedValue,
    normalize,
)

from .context import ValidatorContext, ValidatorFunc

from .directives import Directive, parse_tag

from .registry import (
    ValidatorRegistry,
    create_default_registry,
    default_registry,
    register,
    lookup,
)

from .validators import (
    is_empty,
    is_not_empty,
    is_min,
    is_max,
    is_lower_case,
    is_upper_case,
    is_numeric,
    BUILTIN_VALIDATORS,
    register_default_validators,
)

from .fields import Field, FieldArena, is_record, walk

from .dispatch import MethodSpec, MethodTable, methods, invoke

from .errors import (
    ValidationMode,
    ValidationErrorDetail,
    ValidationError,
    ValidationErrorAccumulator,
    FailFastAccumulator,
    CollectAllAccumulator,
    create_accumulator,
)

from .engine import BEFORE_VALIDATE_HOOK, TagValidator, check, validate

__all__ = [
    # Values
    "StrValue",
    "IntValue",
    "FloatValue",
    "NilValue",
    "OpaqueValue",
    "Value",
    "NormalizedValue",
    "normalize",
    # Context
    "ValidatorContext",
    "ValidatorFunc",
    # Directives
    "Directive",
    "parse_tag",
    # Registry
    "ValidatorRegistry",
    "create_default_registry",
    "default_registry",
    "register",
    "lookup",
    # Validators
    "is_empty",
    "is_not_empty",
    "is_min",
    "is_max",
    "is_lower_case",
    "is_upper_case",
    "is_numeric",
    "BUILTIN_VALIDATORS",
    "register_default_validators",
    # Fields
    "Field",
    "FieldArena",
    "is_record",
    "walk",
    # Dispatch
    "MethodSpec",
    "MethodTable",
    "methods",
    "invoke",
    # Errors
    "ValidationMode",
    "ValidationErrorDetail",
    "ValidationError",
    "ValidationErrorAccumulator",
    "FailFastAccumulator",
    "CollectAllAccumulator",
    "create_accumulator",
    # Engine
    "BEFORE_VALIDATE_HOOK",
    "TagValidator",
    "check",
    "validate",
]
