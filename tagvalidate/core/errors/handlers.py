"""Exception Bridges

Converts AppErrors into exceptions for code paths that don't use the Result
monad: init-time registration and the raising `TagValidator.validate` API.
"""
from __future__ import annotations

from tagvalidate.core.logging import get_logger

from .types import AppError, Result

log = get_logger("tagvalidate.errors")


class AppErrorException(Exception):
    """Exception wrapper for AppError."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self):
        return self.error.code


class RegistryError(AppErrorException):
    """Registry or method table misuse (sealed, duplicate name)."""


def raise_error(error: AppError, exc_type: type[AppErrorException] = AppErrorException) -> None:
    """Raise AppError as exception.

    Usage:
        if registry.sealed:
            raise_error(configuration_error("...").error, RegistryError)
    """
    log.warning(
        "error_raised",
        error_code=error.code.name,
        category=error.code.category,
        message=error.message,
        origin=error.context.origin,
        metadata=error.metadata,
    )
    raise exc_type(error)


def raise_result(result: Result) -> None:
    """Raise error if Result is Err, otherwise return.

    Usage:
        result = validator.check(record)
        raise_result(result)  # Raises if Err
    """
    if result.is_err():
        raise_error(result.unwrap_err())
