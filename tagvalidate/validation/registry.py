"""Validator registry - name to function lookup with a two-phase lifecycle.

Phase one (registration) happens at import/startup: the built-ins register
themselves and applications may add custom validators under new names.
Phase two (validation) begins when the registry is sealed; from then on it is
read-only and may be shared by passes running on several threads.

The registry has no internal locking. Calling `register` while passes are
running is a precondition violation; sealing turns it into a RegistryError.
"""
from __future__ import annotations

from tagvalidate.core.errors import (
    AppError,
    ErrorCode,
    Ok,
    RegistryError,
    Result,
    configuration_error,
    raise_error,
    unknown_validator,
)
from tagvalidate.core.logging import validation_logger

from .context import ValidatorFunc

log = validation_logger()


class ValidatorRegistry:
    """Mapping from validator name to validator function."""

    def __init__(self) -> None:
        self._validators: dict[str, ValidatorFunc] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, name: str, validator: ValidatorFunc) -> None:
        """Register a validator. Only valid before the registry is sealed."""
        if self._sealed:
            raise_error(configuration_error(
                f"Cannot register validator '{name}': registry is sealed",
                code=ErrorCode.E7005_REGISTRY_SEALED,
                origin="registry",
                validator=name,
            ).error, RegistryError)
        if name in self._validators:
            raise_error(configuration_error(
                f"Validator '{name}' is already registered",
                code=ErrorCode.E7006_DUPLICATE_VALIDATOR,
                origin="registry",
                validator=name,
            ).error, RegistryError)
        self._validators[name] = validator
        log.debug("validator_registered", validator=name)

    def seal(self) -> None:
        """End the registration phase."""
        if not self._sealed:
            self._sealed = True
            log.debug("registry_sealed", validators=sorted(self._validators))

    def lookup(self, name: str) -> Result[ValidatorFunc, AppError]:
        if (validator := self._validators.get(name)) is None:
            return unknown_validator(name)
        return Ok(validator)

    def names(self) -> list[str]:
        return list(self._validators)

    def __contains__(self, name: str) -> bool:
        return name in self._validators


def create_default_registry() -> ValidatorRegistry:
    """Fresh registry holding the built-in validators, still open for registration."""
    from .validators import register_default_validators

    registry = ValidatorRegistry()
    register_default_validators(registry)
    return registry


default_registry = create_default_registry()


def register(name: str, validator: ValidatorFunc) -> None:
    """Register a custom validator on the process-wide registry."""
    default_registry.register(name, validator)


def lookup(name: str) -> Result[ValidatorFunc, AppError]:
    return default_registry.lookup(name)
