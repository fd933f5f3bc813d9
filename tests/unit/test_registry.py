"""
Unit tests for the validator registry lifecycle.
"""
import pytest

from tagvalidate.core.errors import ErrorCode, Ok, RegistryError
from tagvalidate.validation import BUILTIN_VALIDATORS, ValidatorRegistry, is_min


def _always_ok(ctx, options):
    return Ok(None)


class TestValidatorRegistry:
    def test_defaults_registered(self, registry):
        assert sorted(registry.names()) == sorted(BUILTIN_VALIDATORS)
        assert registry.lookup("min").unwrap() is is_min

    def test_unknown_name_is_configuration_error(self, registry):
        error = registry.lookup("postcode").unwrap_err()
        assert error.code == ErrorCode.E7001_UNKNOWN_VALIDATOR
        assert error.code.is_configuration
        assert "'postcode'" in error.message
        assert "{struct}" in error.message and "{field}" in error.message

    def test_custom_validator_before_seal(self, registry):
        registry.register("always_ok", _always_ok)
        assert "always_ok" in registry
        assert registry.lookup("always_ok").unwrap() is _always_ok

    def test_register_after_seal_raises(self, registry):
        registry.seal()
        with pytest.raises(RegistryError) as exc_info:
            registry.register("always_ok", _always_ok)
        assert exc_info.value.code == ErrorCode.E7005_REGISTRY_SEALED
        assert "always_ok" not in registry

    def test_lookup_after_seal(self, registry):
        registry.seal()
        assert registry.sealed
        assert registry.lookup("numeric").is_ok()

    def test_duplicate_name_raises(self, registry):
        with pytest.raises(RegistryError) as exc_info:
            registry.register("min", _always_ok)
        assert exc_info.value.code == ErrorCode.E7006_DUPLICATE_VALIDATOR
        assert registry.lookup("min").unwrap() is is_min

    def test_empty_registry(self):
        assert ValidatorRegistry().names() == []
