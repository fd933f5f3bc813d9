"""Domain-Specific Error Builders

Ergonomic constructors for typed errors across the engine. Each builder
creates an AppError with the appropriate code and wraps it in Err.

Messages produced by validators keep `{struct}` and `{field}` placeholders;
the engine resolves them once it knows which record and field failed.
"""
from .types import AppError, ErrorCode, ErrorContext, Err, from_exception


# =============================================================================
# Validation Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    validator: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create value-validation error."""
    meta = {"validator": validator, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
    ))


def cannot_be_empty(validator: str) -> Err[AppError]:
    return validation_error(
        "{field} cannot be empty.",
        code=ErrorCode.E2001_REQUIRED_FIELD_MISSING,
        validator=validator,
    )


def invalid_format(message: str, validator: str) -> Err[AppError]:
    return validation_error(message, code=ErrorCode.E2002_INVALID_FORMAT, validator=validator)


def out_of_range(message: str, validator: str, limit: int) -> Err[AppError]:
    return validation_error(
        message,
        code=ErrorCode.E2003_OUT_OF_RANGE,
        validator=validator,
        limit=limit,
    )


def unsupported_type(validator: str, type_name: str) -> Err[AppError]:
    """Validator applied to a value kind it has no logic for."""
    return validation_error(
        f"Validator with name '{validator}' on struct '{{struct}}' and field '{{field}}' is not supported.",
        code=ErrorCode.E2004_INVALID_TYPE,
        validator=validator,
        type=type_name,
    )


def invalid_record(value: object, origin: str = "") -> Err[AppError]:
    return validation_error(
        f"Expected a dataclass or pydantic model instance, got '{type(value).__name__}'",
        code=ErrorCode.E2004_INVALID_TYPE,
        origin=origin,
        type=type(value).__name__,
    )


# =============================================================================
# Configuration Errors (E7xxx)
# =============================================================================

def configuration_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E7000_CONFIGURATION_GENERIC,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create configuration error. These fail the whole validation pass."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
    ))


def unknown_validator(name: str) -> Err[AppError]:
    return configuration_error(
        f"Validator '{name}' on struct '{{struct}}' and field '{{field}}' does not exist.",
        code=ErrorCode.E7001_UNKNOWN_VALIDATOR,
        origin="registry",
        validator=name,
    )


def takes_no_arguments(validator: str) -> Err[AppError]:
    return configuration_error(
        f"Validator '{validator}' does not support any arguments.",
        code=ErrorCode.E7002_INVALID_ARGUMENT_COUNT,
        validator=validator,
    )


def requires_single_argument(validator: str) -> Err[AppError]:
    return configuration_error(
        f"Validator '{validator}' requires a single argument.",
        code=ErrorCode.E7002_INVALID_ARGUMENT_COUNT,
        validator=validator,
    )


def unparsable_argument(validator: str, argument: str) -> Err[AppError]:
    return configuration_error(
        f"Unable to parse '{validator}' validator value.",
        code=ErrorCode.E7003_INVALID_ARGUMENT,
        validator=validator,
        argument=argument,
    )


def tag_syntax_error(tag: str, reason: str) -> Err[AppError]:
    return configuration_error(
        f"Invalid validation tag '{tag}': {reason}",
        code=ErrorCode.E7004_TAG_SYNTAX,
        origin="tag_parser",
        tag=tag,
    )


# =============================================================================
# Dispatch Errors (E8xxx)
# =============================================================================

def dispatch_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E8000_DISPATCH_GENERIC,
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create dynamic dispatch error."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin="dispatch"),
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


def method_not_found(target: object, method: str) -> Err[AppError]:
    return dispatch_error(
        "Method does not exist.",
        code=ErrorCode.E8001_METHOD_NOT_FOUND,
        target=type(target).__name__,
        method=method,
    )


def argument_mismatch(method: str, reason: str) -> Err[AppError]:
    return dispatch_error(
        "Arguments does not match those of target function.",
        code=ErrorCode.E8002_ARGUMENT_MISMATCH,
        method=method,
        reason=reason,
    )


def unhandled_call(method: str, cause: Exception) -> Err[AppError]:
    return from_exception(
        cause,
        ErrorCode.E8003_UNHANDLED_CALL,
        "Unhandled function call error.",
        origin="dispatch",
        method=method,
        exception=type(cause).__name__,
    )
