"""
Shared fixtures and record types for the tagvalidate test suite.
"""
from dataclasses import dataclass, field
from typing import Optional

import pytest
from pydantic import BaseModel, Field as ModelField

from tagvalidate.validation import (
    MethodTable,
    TagValidator,
    ValidatorContext,
    create_default_registry,
    normalize,
)


# ==========================================================================
# Records
# ==========================================================================

@dataclass
class Address:
    Street: str = field(default="", metadata={"validate": "not_empty"})
    Zip: str = field(default="", metadata={"validate": "numeric,min:1000,max:99999"})


@dataclass
class Customer:
    Name: str = field(default="", metadata={"validate": "not_empty,max:10"})
    Code: str = field(default="", metadata={"validate": "uppercase"})
    Nickname: Optional[str] = field(default=None, metadata={"validate": "empty,min:3"})
    Home: Optional[Address] = None
    _secret: str = field(default="", metadata={"validate": "not_empty"})


@dataclass
class LineItem:
    Sku: str = field(default="", metadata={"validate": "not_empty,uppercase"})
    Quantity: int = field(default=0, metadata={"validate": "min:1,max:100"})


@dataclass
class Order:
    Reference: str = field(default="", metadata={"validate": "not_empty"})
    Items: list = field(default_factory=list)


class Profile(BaseModel):
    handle: str = ModelField(default="", json_schema_extra={"validate": "not_empty,lowercase"})
    score: float = ModelField(default=0.0, json_schema_extra={"validate": "max:10"})
    bio: str = ""


# ==========================================================================
# Engine pieces
# ==========================================================================

@pytest.fixture
def registry():
    """Fresh registry with the built-ins, still open for registration."""
    return create_default_registry()


@pytest.fixture
def method_table():
    return MethodTable()


@pytest.fixture
def engine(registry, method_table):
    return TagValidator(registry, methods=method_table, mode="collect_all")


@pytest.fixture
def make_ctx():
    """Build a ValidatorContext the way the engine does."""

    def _make(raw, declared_type=None):
        return ValidatorContext.from_normalized(normalize(raw, declared_type))

    return _make


@pytest.fixture
def valid_customer():
    return Customer(
        Name="Ada",
        Code="ACME",
        Nickname=None,
        Home=Address(Street="Main St", Zip="12345"),
    )
