"""
Integration tests - full validation passes through TagValidator.
"""
from dataclasses import dataclass, field
from typing import Optional

import pytest

from conftest import Address, Customer, LineItem, Order, Profile
from tagvalidate.core.errors import AppErrorException, ErrorCode, Ok, validation_error
from tagvalidate.validation import TagValidator, ValidationError, ValidationMode


@dataclass
class _Unknown:
    Name: str = field(default="x", metadata={"validate": "not_empty,postcode"})


@dataclass
class _BadArity:
    Name: str = field(default="x", metadata={"validate": "min"})


@dataclass
class _Tags:
    Labels: list = field(default_factory=list, metadata={"validate": "min:1"})


@dataclass
class _Coerced:
    Age: str = field(default="", metadata={"validate": "numeric,min:18,max:130"})


@dataclass
class _Node:
    Name: str = field(default="", metadata={"validate": "not_empty"})
    Next: Optional["_Node"] = None
    Children: list = field(default_factory=list)


@dataclass
class _Hooked:
    Name: str = field(default="", metadata={"validate": "not_empty"})

    def before_validate(self) -> None:
        self.Name = self.Name.strip()


def _paths(details):
    return {d.field_path: d for d in details}


class TestValidRecords:
    def test_valid_customer_has_no_errors(self, engine, valid_customer):
        assert engine.check(valid_customer).unwrap() == []
        engine.validate(valid_customer)

    def test_pydantic_record(self, engine):
        details = engine.check(Profile(handle="Ada", score=11.0)).unwrap()
        assert {d.field_path: d.message for d in details} == {
            "handle": "handle must be in lower case.",
            "score": "score cannot be greater than 10.",
        }


class TestFieldFailures:
    def test_messages_resolve_field_paths(self, engine):
        customer = Customer(Name="Bartholomew Jr", Code="acme", Home=Address(Street="", Zip="12a45"))
        details = _paths(engine.check(customer).unwrap())
        assert details["Name"].message == "Name is longer than 10 characters."
        assert details["Code"].message == "Code must be in upper case."
        assert details["Home.Street"].message == "Home.Street cannot be empty."
        assert details["Home.Zip"].message == "Home.Zip must contain numbers only."
        assert details["Home.Zip"].constraint == "numeric"
        assert details["Home.Zip"].code == ErrorCode.E2002_INVALID_FORMAT
        assert details["Home.Zip"].actual_value == "12a45"
        assert details["Home.Zip"].to_dict()["value"] == "12a45"

    def test_unexported_field_never_validated(self, engine, valid_customer):
        valid_customer._secret = ""
        assert engine.check(valid_customer).unwrap() == []

    def test_chain_stops_at_first_failure(self, engine):
        details = engine.check(Customer(Name="", Code="A", Home=None)).unwrap()
        assert [(d.field_path, d.constraint) for d in details] == [("Name", "not_empty")]

    def test_empty_short_circuits_remaining_directives(self, engine, valid_customer):
        valid_customer.Nickname = ""
        assert engine.check(valid_customer).unwrap() == []
        valid_customer.Nickname = "Al"
        details = engine.check(valid_customer).unwrap()
        assert details[0].message == "Nickname cannot be shorter than 3 characters."

    def test_numeric_coercion_feeds_bounds(self, engine):
        assert engine.check(_Coerced(Age="42")).unwrap() == []
        details = engine.check(_Coerced(Age="9")).unwrap()
        assert details[0].message == "Age cannot be less than 18."
        assert details[0].constraint == "min"

    def test_coercion_does_not_touch_record(self, engine):
        record = _Coerced(Age="42")
        engine.check(record)
        assert record.Age == "42"

    def test_unsupported_type_recorded_against_field(self, engine):
        details = engine.check(_Tags(Labels=["a"])).unwrap()
        assert details[0].code == ErrorCode.E2004_INVALID_TYPE
        assert details[0].message == "Validator with name 'min' on struct '_Tags' and field 'Labels' is not supported."

    def test_records_inside_lists(self, engine):
        order = Order(Reference="R-1", Items=[LineItem(Sku="AB1", Quantity=1), LineItem(Sku="ab2", Quantity=0)])
        details = _paths(engine.check(order).unwrap())
        assert set(details) == {"Items.1.Sku", "Items.1.Quantity"}
        assert details["Items.1.Quantity"].message == "Items.1.Quantity cannot be less than 1."

    def test_idempotent(self, engine):
        customer = Customer(Name="", Code="x", Home=Address(Street="", Zip=""))
        first = engine.check(customer).unwrap()
        second = engine.check(customer).unwrap()
        assert first == second
        assert len(first) == 4


class TestAccumulationModes:
    def test_fail_fast_stops_after_first_field(self, registry, method_table):
        engine = TagValidator(registry, methods=method_table, mode=ValidationMode.FAIL_FAST)
        details = engine.check(Customer(Name="", Code="x")).unwrap()
        assert [d.field_path for d in details] == ["Name"]

    def test_max_errors(self, registry, method_table):
        engine = TagValidator(registry, methods=method_table, max_errors=2)
        customer = Customer(Name="", Code="x", Home=Address(Street="", Zip=""))
        assert len(engine.check(customer).unwrap()) == 2

    @pytest.mark.parametrize("max_errors", [0, -1])
    def test_max_errors_below_one_rejected(self, registry, method_table, max_errors):
        with pytest.raises(AppErrorException) as exc_info:
            TagValidator(registry, methods=method_table, max_errors=max_errors)
        assert exc_info.value.code == ErrorCode.E7003_INVALID_ARGUMENT
        assert exc_info.value.error.metadata["max_errors"] == max_errors

    def test_validate_raises_with_all_details(self, engine):
        with pytest.raises(ValidationError) as exc_info:
            engine.validate(Customer(Name="", Code="x"))
        assert set(exc_info.value.field_errors) == {"Name", "Code"}
        assert exc_info.value.mode == ValidationMode.COLLECT_ALL


class TestConfigurationErrors:
    def test_unknown_validator_aborts_pass(self, engine):
        error = engine.check(_Unknown()).unwrap_err()
        assert error.code == ErrorCode.E7001_UNKNOWN_VALIDATOR
        assert error.message == "Validator 'postcode' on struct '_Unknown' and field 'Name' does not exist."

    def test_arity_error_aborts_pass(self, engine):
        error = engine.check(_BadArity()).unwrap_err()
        assert error.code == ErrorCode.E7002_INVALID_ARGUMENT_COUNT
        assert error.metadata["field"] == "Name"

    def test_validate_raises_app_error(self, engine):
        with pytest.raises(AppErrorException) as exc_info:
            engine.validate(_Unknown())
        assert exc_info.value.code == ErrorCode.E7001_UNKNOWN_VALIDATOR

    def test_non_record_input(self, engine):
        assert engine.check("not a record").unwrap_err().code == ErrorCode.E2004_INVALID_TYPE


class TestRegistryLifecycle:
    def test_pass_seals_registry(self, engine, registry, valid_customer):
        assert not registry.sealed
        engine.check(valid_customer)
        assert registry.sealed

    def test_custom_validator(self, registry, method_table):
        def is_postcode(ctx, options):
            if len(ctx.value.value) != 5:
                return validation_error("{field} of {struct} is not a postcode.", validator="postcode")
            return Ok(None)

        registry.register("postcode", is_postcode)
        engine = TagValidator(registry, methods=method_table)
        assert engine.check(_Unknown(Name="12345")).unwrap() == []
        details = engine.check(_Unknown(Name="123")).unwrap()
        assert details[0].message == "Name of _Unknown is not a postcode."


class TestLifecycleHooks:
    def test_before_validate_runs_when_exposed(self, engine, method_table):
        method_table.expose(_Hooked, "before_validate")
        record = _Hooked(Name="   ")
        details = engine.check(record).unwrap()
        assert record.Name == ""
        assert details[0].field_path == "Name"

    def test_hook_not_called_unless_exposed(self, engine):
        record = _Hooked(Name="   ")
        assert engine.check(record).unwrap() == []
        assert record.Name == "   "

    def test_failing_hook_aborts_pass(self, engine, method_table):
        @dataclass
        class _Broken:
            Name: Optional[str] = None

            def before_validate(self) -> None:
                raise ValueError("nope")

        method_table.expose(_Broken, "before_validate")
        error = engine.check(_Broken()).unwrap_err()
        assert error.code == ErrorCode.E8003_UNHANDLED_CALL
        assert error.metadata["struct"] == "_Broken"


class TestCyclicRecords:
    def test_self_reference_validated_once(self, engine):
        node = _Node(Name="a")
        node.Next = node
        assert engine.check(node).unwrap() == []

        node.Name = ""
        assert [d.field_path for d in engine.check(node).unwrap()] == ["Name"]

    def test_two_node_cycle(self, engine):
        head, tail = _Node(Name="head"), _Node(Name="")
        head.Next, tail.Next = tail, head
        assert [d.field_path for d in engine.check(head).unwrap()] == ["Next.Name"]

    def test_self_reference_through_list(self, engine):
        node = _Node(Name="")
        node.Children = [node, _Node(Name="")]
        assert [d.field_path for d in engine.check(node).unwrap()] == ["Name", "Children.1.Name"]

    def test_shared_child_validated_on_each_path(self, engine):
        leaf = _Node(Name="")
        root = _Node(Name="root", Next=leaf, Children=[leaf])
        assert [d.field_path for d in engine.check(root).unwrap()] == ["Next.Name", "Children.0.Name"]
