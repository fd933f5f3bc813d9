"""Validation Error System

Field-scoped errors collected during a validation pass. Supports both
fail-fast and collect-all accumulation modes.

Error Format:
{
    "error": {
        "type": "validation_error",
        "message": "Validation failed",
        "mode": "collect_all",
        "errors": [
            {
                "field": "Address.Zip",
                "constraint": "numeric",
                "code": "E2002_INVALID_FORMAT",
                "message": "Address.Zip must contain numbers only."
            }
        ]
    }
}
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tagvalidate.core.errors import AppError, ErrorCode


class ValidationMode(str, Enum):
    """Validation accumulation strategy."""
    FAIL_FAST = "fail_fast"
    COLLECT_ALL = "collect_all"


@dataclass(frozen=True, slots=True)
class ValidationErrorDetail:
    """Validation failure for a single field.

    - field_path: dotted path to the offending field (e.g., "Order.Items.0.Sku")
    - constraint: name of the validator that failed
    - code: error code from the validator's AppError
    - message: message with placeholders already resolved
    - actual_value: raw value of the field when it failed
    """
    field_path: str
    constraint: str
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC
    message: str = ""
    actual_value: Any = None

    @classmethod
    def from_app_error(cls, field_path: str, constraint: str, error: AppError, actual_value: Any = None) -> ValidationErrorDetail:
        return cls(field_path=field_path, constraint=constraint, code=error.code, message=error.message,
            actual_value=actual_value)

    def to_dict(self) -> dict[str, Any]:
        result = {"field": self.field_path, "constraint": self.constraint, "code": self.code.name,
            "message": self.message}
        if self.actual_value is not None: result["value"] = self.actual_value
        return result


@dataclass
class ValidationError(Exception):
    """Raised by `TagValidator.validate` when one or more fields fail."""
    message: str
    details: list[ValidationErrorDetail]
    mode: ValidationMode = ValidationMode.COLLECT_ALL

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details: return self.message
        if len(self.details) == 1: return f"{(d := self.details[0]).field_path}: {d.message}"
        return f"{self.message} ({len(self.details)} errors)"

    @property
    def field_errors(self) -> dict[str, list[ValidationErrorDetail]]:
        """Group errors by field path."""
        result: dict[str, list[ValidationErrorDetail]] = {}
        for detail in self.details: result.setdefault(detail.field_path, []).append(detail)
        return result

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"type": "validation_error", "message": self.message, "mode": self.mode.value,
            "error_count": len(self.details), "errors": [d.to_dict() for d in self.details]}}


class ValidationErrorAccumulator(ABC):
    """Abstract base for error accumulation strategies."""

    @abstractmethod
    def add_error(self, detail: ValidationErrorDetail) -> bool:
        """Add error detail. Returns True if should continue, False if should stop."""

    @abstractmethod
    def get_errors(self) -> list[ValidationErrorDetail]:
        """Get accumulated errors."""

    @abstractmethod
    def has_errors(self) -> bool:
        """Check if any errors accumulated."""

    @property
    @abstractmethod
    def mode(self) -> ValidationMode:
        """Get the accumulation mode."""

    def raise_if_errors(self, message: str = "Validation failed") -> None:
        """Raise ValidationError if errors exist."""
        if self.has_errors():
            raise ValidationError(message=message, details=self.get_errors(), mode=self.mode)


@dataclass
class FailFastAccumulator(ValidationErrorAccumulator):
    """Fail-fast accumulator: stops on first error."""
    _error: ValidationErrorDetail | None = None

    @property
    def mode(self) -> ValidationMode: return ValidationMode.FAIL_FAST

    def add_error(self, detail: ValidationErrorDetail) -> bool:
        if self._error is None: self._error = detail
        return False

    def get_errors(self) -> list[ValidationErrorDetail]: return [self._error] if self._error else []

    def has_errors(self) -> bool: return self._error is not None


@dataclass
class CollectAllAccumulator(ValidationErrorAccumulator):
    """Collect-all accumulator: gathers all errors up to max_errors."""
    _errors: list[ValidationErrorDetail] = field(default_factory=list)
    max_errors: int = 50

    @property
    def mode(self) -> ValidationMode: return ValidationMode.COLLECT_ALL

    def add_error(self, detail: ValidationErrorDetail) -> bool:
        if len(self._errors) < self.max_errors: self._errors.append(detail)
        return len(self._errors) < self.max_errors

    def get_errors(self) -> list[ValidationErrorDetail]: return self._errors.copy()

    def has_errors(self) -> bool: return len(self._errors) > 0


def create_accumulator(mode: ValidationMode, max_errors: int = 50) -> ValidationErrorAccumulator:
    """Factory for creating accumulators based on mode."""
    return FailFastAccumulator() if mode == ValidationMode.FAIL_FAST else CollectAllAccumulator(max_errors=max_errors)
