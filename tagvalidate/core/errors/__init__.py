"""Monadic Error Handling System

Type-safe error handling inspired by Haskell's Either monad and Rust's
Result type.

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Hierarchical error code taxonomy
- Builder functions: Ergonomic error construction

Usage:
    from tagvalidate.core.errors import Ok, Err, Result, AppError

    match registry.lookup("min"):
        case Ok(validator):
            validator(ctx, ["3"])
        case Err(error):
            log.error(error.message, code=error.code.name)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    # Constructors
    from_exception,
    # Combinators
    sequence_results,
)

from .builders import (
    # Validation (E2xxx)
    validation_error,
    cannot_be_empty,
    invalid_format,
    out_of_range,
    unsupported_type,
    invalid_record,
    # Configuration (E7xxx)
    configuration_error,
    unknown_validator,
    takes_no_arguments,
    requires_single_argument,
    unparsable_argument,
    tag_syntax_error,
    # Dispatch (E8xxx)
    dispatch_error,
    method_not_found,
    argument_mismatch,
    unhandled_call,
)

from .handlers import (
    AppErrorException,
    RegistryError,
    raise_error,
    raise_result,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "from_exception",
    "sequence_results",
    # Validation (E2xxx)
    "validation_error",
    "cannot_be_empty",
    "invalid_format",
    "out_of_range",
    "unsupported_type",
    "invalid_record",
    # Configuration (E7xxx)
    "configuration_error",
    "unknown_validator",
    "takes_no_arguments",
    "requires_single_argument",
    "unparsable_argument",
    "tag_syntax_error",
    # Dispatch (E8xxx)
    "dispatch_error",
    "method_not_found",
    "argument_mismatch",
    "unhandled_call",
    # Exceptions
    "AppErrorException",
    "RegistryError",
    "raise_error",
    "raise_result",
]
