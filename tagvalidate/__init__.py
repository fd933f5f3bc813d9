"""tagvalidate - tag-driven validation for dataclasses and pydantic models.

Applications call `tagvalidate.configure()` once at startup to install the
structlog pipeline using the LOG_LEVEL and LOG_JSON settings.
"""
from tagvalidate.core.logging import configure_logging as configure
from tagvalidate.validation import (
    Directive,
    Field,
    MethodTable,
    TagValidator,
    ValidationError,
    ValidationErrorDetail,
    ValidationMode,
    ValidatorContext,
    ValidatorRegistry,
    check,
    invoke,
    parse_tag,
    register,
    validate,
    walk,
)

__version__ = "0.1.0"
