"""Validation pass orchestration.

Ties the walker, normalization, registry and validators together:

    validator = TagValidator()
    match validator.check(user):
        case Ok([]): ...                 # valid
        case Ok(details): ...            # field failures, keyed by path
        case Err(error): ...             # configuration problem, pass aborted

Per field, the directives run in declared order against one shared
ValidatorContext. The chain ends at the first failure or when a validator
sets the stop-flag. Value failures and unsupported-type failures are recorded
against the field; configuration errors (unknown validator, bad arity,
unparsable option, bad tag) abort the whole pass.

Nested records are validated recursively, as are records held in lists or
tuples, whose index becomes a path segment ("Items.0.Sku").
"""
from __future__ import annotations

import weakref
from typing import Any

from tagvalidate.core.config import settings
from tagvalidate.core.errors import AppError, ErrorCode, Err, Ok, Result, configuration_error, raise_error, raise_result
from tagvalidate.core.logging import validation_logger

from .context import ValidatorContext
from .dispatch import MethodTable, methods as default_methods
from .errors import ValidationError, ValidationErrorAccumulator, ValidationErrorDetail, ValidationMode, create_accumulator
from .fields import Field, FieldArena, is_record, walk
from .registry import ValidatorRegistry, default_registry
from .values import normalize

log = validation_logger()

BEFORE_VALIDATE_HOOK = "before_validate"


class TagValidator:
    """Runs validation passes over tagged records.

    A TagValidator holds no per-pass state and can be shared, provided its
    registry is no longer being written to.
    """

    __slots__ = ("registry", "methods", "tag_key", "mode", "max_errors")

    def __init__(
        self,
        registry: ValidatorRegistry | None = None,
        *,
        methods: MethodTable | None = None,
        tag_key: str | None = None,
        mode: ValidationMode | str | None = None,
        max_errors: int | None = None,
    ):
        self.registry = registry if registry is not None else default_registry
        self.methods = methods if methods is not None else default_methods
        self.tag_key = tag_key or settings.TAG_KEY
        self.mode = ValidationMode(mode or settings.VALIDATION_MODE)
        self.max_errors = max_errors if max_errors is not None else settings.MAX_ERRORS
        if self.max_errors < 1:
            raise_error(configuration_error(
                f"max_errors must be at least 1, got {self.max_errors}.",
                code=ErrorCode.E7003_INVALID_ARGUMENT,
                origin="tag_validator",
                max_errors=self.max_errors,
            ).unwrap_err())

    def check(self, record: Any) -> Result[list[ValidationErrorDetail], AppError]:
        """Validate `record`, returning the collected field failures."""
        if settings.SEAL_REGISTRY_ON_FIRST_PASS:
            self.registry.seal()
        if isinstance(record, weakref.ref):
            record = record()

        struct = type(record).__name__
        log.debug("validation_pass_started", record=struct, mode=self.mode.value)

        if self.methods.has(record, BEFORE_VALIDATE_HOOK):
            hook = self.methods.invoke(record, BEFORE_VALIDATE_HOOK)
            if hook.is_err():
                log.warning("before_validate_failed", record=struct, error_code=hook.unwrap_err().code.name)
                return Err(hook.unwrap_err().with_metadata(struct=struct))

        accumulator = create_accumulator(self.mode, self.max_errors)
        arena = FieldArena()
        result = self._validate_record(record, arena, None, accumulator, set())
        if result.is_err():
            error = result.unwrap_err()
            log.warning("validation_pass_aborted", record=struct, error_code=error.code.name, message=error.message)
            return Err(error)

        errors = accumulator.get_errors()
        log.debug("validation_pass_finished", record=struct, fields=len(arena), errors=len(errors))
        return Ok(errors)

    def validate(self, record: Any) -> None:
        """Raising form of `check`.

        Raises:
            AppErrorException: on a configuration error.
            ValidationError: when any field fails, carrying every detail.
        """
        result = self.check(record)
        raise_result(result)
        if details := result.unwrap():
            raise ValidationError(message="Validation failed", details=details, mode=self.mode)

    def _validate_record(
        self,
        record: Any,
        arena: FieldArena,
        parent: int | None,
        accumulator: ValidationErrorAccumulator,
        active: set[int],
    ) -> Result[bool, AppError]:
        """Validate one record's fields. Ok(False) means the accumulator is full.

        `active` holds the ids of the records on the current path; a record
        that refers back to one of them is not entered again.
        """
        walked = walk(record, self.tag_key, arena=arena, parent=parent)
        if walked.is_err():
            return walked

        active.add(id(record))
        try:
            return self._validate_fields(walked.unwrap(), arena, accumulator, active)
        finally:
            active.discard(id(record))

    def _validate_fields(
        self,
        fields: list[Field],
        arena: FieldArena,
        accumulator: ValidationErrorAccumulator,
        active: set[int],
    ) -> Result[bool, AppError]:
        for field in fields:
            outcome = self._validate_field(field)
            if outcome.is_err():
                return outcome
            if (detail := outcome.unwrap()) is not None and not accumulator.add_error(detail):
                return Ok(False)

            nested = self._descend(field, arena, accumulator, active)
            if nested.is_err() or not nested.unwrap():
                return nested

        return Ok(True)

    def _validate_field(self, field: Field) -> Result[ValidationErrorDetail | None, AppError]:
        ctx = ValidatorContext.from_normalized(normalize(field.value, field.declared_type))
        path = field.full_name()

        for directive in field.directives:
            lookup = self.registry.lookup(directive.name)
            if lookup.is_err():
                return Err(self._resolve(lookup.unwrap_err(), field, path))

            result = lookup.unwrap()(ctx, directive.options)
            if result.is_err():
                error = self._resolve(result.unwrap_err(), field, path)
                if error.code.is_configuration:
                    return Err(error)
                log.debug("field_invalid", field=path, validator=directive.name, error_code=error.code.name)
                return Ok(ValidationErrorDetail.from_app_error(path, directive.name, error, field.value))

            if ctx.stop_validate:
                break

        return Ok(None)

    def _descend(
        self,
        field: Field,
        arena: FieldArena,
        accumulator: ValidationErrorAccumulator,
        active: set[int],
    ) -> Result[bool, AppError]:
        value = field.value
        if is_record(value):
            if id(value) in active:
                log.debug("cycle_skipped", field=field.full_name(), record=type(value).__name__)
                return Ok(True)
            return self._validate_record(value, arena, field.handle, accumulator, active)

        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if not is_record(item) or id(item) in active:
                    continue
                element = arena.add(str(index), item, parent=field.handle, owner=field.owner)
                nested = self._validate_record(item, arena, element.handle, accumulator, active)
                if nested.is_err() or not nested.unwrap():
                    return nested

        return Ok(True)

    @staticmethod
    def _resolve(error: AppError, field: Field, path: str) -> AppError:
        return error.fill_placeholders(struct=field.owner, field=path)


def check(record: Any, **options: Any) -> Result[list[ValidationErrorDetail], AppError]:
    """Validate with the process-wide registry. See `TagValidator.check`."""
    return TagValidator(**options).check(record)


def validate(record: Any, **options: Any) -> None:
    """Validate with the process-wide registry, raising on failure."""
    TagValidator(**options).validate(record)
