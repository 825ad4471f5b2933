"""Tests for schemas."""

from types import MappingProxyType, SimpleNamespace

import pytest

from mixor_core.element import get_element_meta
from mixor_core.panic import SchemaPanic
from mixor_core.result import err, is_ok, ok
from mixor_core.schema import Schema, is_schema, schema
from mixor_core.specification import rule, spec
from mixor_core.value import value


def name_value():
    return value(lambda v: ok(v) if len(v) > 0 else err("EMPTY_NAME"))


def age_value():
    return value(lambda v: ok(v) if v >= 0 else err("INVALID_AGE"))


def spy(name, calls, error=None):
    """Value recording its invocation and failing with ``error`` if given."""

    def check(raw):
        calls.append(name)
        return err(error) if error else ok(raw)

    return value(check)


@pytest.fixture
def user_schema():
    return schema(
        "User validation schema with name and age fields",
        {"name": name_value(), "age": age_value()},
    )


class TestValidation:
    """Test whole-object validation."""

    def test_all_mode_collects_errors(self, user_schema):
        """Test that every failing field is reported."""
        result = user_schema({"name": "", "age": -5})
        assert result == err({"name": "EMPTY_NAME", "age": "INVALID_AGE"})

    def test_strict_mode_stops_at_first_error(self, user_schema):
        """Test that strict mode reports only the first failure."""
        result = user_schema({"name": "", "age": -5}, mode="strict")
        assert result == err({"name": "EMPTY_NAME"})

    def test_valid_input(self, user_schema):
        """Test that valid input yields the validated values."""
        assert user_schema({"name": "John", "age": 30}) == ok({"name": "John", "age": 30})
        assert user_schema({"name": "John", "age": 30}, mode="strict") == ok({"name": "John", "age": 30})

    def test_single_failure_in_all_mode(self, user_schema):
        """Test that the error keys are exactly the failing fields."""
        result = user_schema({"name": "John", "age": -1})
        assert result == err({"age": "INVALID_AGE"})

    def test_object_input(self, user_schema):
        """Test that field values can be read from attributes."""
        assert is_ok(user_schema(SimpleNamespace(name="John", age=3)))

    def test_missing_fields_are_none(self):
        """Test that missing fields are passed to their validator as None."""
        present = schema({"email": value(lambda v: ok(v) if v is not None else err("REQUIRED"))})
        assert present({}) == err({"email": "REQUIRED"})
        assert present(SimpleNamespace()) == err({"email": "REQUIRED"})

    def test_extra_input_fields_ignored(self, user_schema):
        """Test that only declared fields are validated."""
        result = user_schema({"name": "John", "age": 1, "role": "Admin"})
        assert result == ok({"name": "John", "age": 1})

    def test_validated_values_are_transformed(self):
        """Test that success values come from the validators."""
        trimmed = schema({"name": value(lambda v: ok(v.strip()))})
        assert trimmed({"name": "  John "}) == ok({"name": "John"})

    def test_empty_schema(self):
        """Test a schema without fields."""
        empty = schema("Nothing to check")
        assert empty({"any": 1}) == ok({})

    def test_invalid_mode(self, user_schema):
        """Test that an unknown mode panics."""
        with pytest.raises(SchemaPanic) as exc_info:
            user_schema({"name": "John", "age": 1}, mode="lenient")

        assert exc_info.value.kind == "INVALID_MODE"

    def test_field_returning_non_result(self):
        """Test that a field must return a result."""
        broken = schema({"flag": value(lambda v: True)})
        with pytest.raises(SchemaPanic) as exc_info:
            broken({"flag": 1})

        assert exc_info.value.kind == "RESULT_EXPECTED"


class TestEvaluationOrder:
    """Test field evaluation in both modes."""

    def test_all_mode_evaluates_every_field_once(self):
        """Test that earlier failures do not skip later fields."""
        calls = []
        checked = schema({
            "a": spy("a", calls, "A"),
            "b": spy("b", calls, "B"),
            "c": spy("c", calls),
        })

        result = checked({})
        assert calls == ["a", "b", "c"]
        assert set(result.error) == {"a", "b"}

    def test_strict_mode_skips_remaining_fields(self):
        """Test that no field is evaluated after the first failure."""
        calls = []
        checked = schema({
            "a": spy("a", calls),
            "b": spy("b", calls, "B"),
            "c": spy("c", calls, "C"),
        })

        result = checked({}, mode="strict")
        assert calls == ["a", "b"]
        assert result == err({"b": "B"})


class TestFieldAccess:
    """Test the mapping side of a schema."""

    def test_attribute_access(self, user_schema):
        """Test that fields can be validated on their own."""
        assert user_schema.name("John Doe") == ok("John Doe")
        assert user_schema.age(-1) == err("INVALID_AGE")

    def test_subscription(self, user_schema):
        """Test item access."""
        assert user_schema["name"] is user_schema.fields["name"]

    def test_mapping_protocol(self, user_schema):
        """Test containment, iteration and length."""
        assert "name" in user_schema
        assert "email" not in user_schema
        assert list(user_schema) == ["name", "age"]
        assert len(user_schema) == 2

    def test_unknown_field(self, user_schema):
        """Test that unknown fields raise the usual errors."""
        with pytest.raises(AttributeError):
            user_schema.email
        with pytest.raises(KeyError):
            user_schema["email"]

    def test_fields_are_read_only(self, user_schema):
        """Test that the field mapping cannot be modified."""
        with pytest.raises(TypeError):
            user_schema.fields["email"] = name_value()

    def test_schema_is_immutable(self, user_schema):
        """Test that schema attributes cannot be replaced."""
        with pytest.raises(AttributeError):
            user_schema.name = name_value()
        with pytest.raises(AttributeError):
            user_schema._hash = "0" * 64

    def test_repr(self, user_schema):
        """Test the representation lists field names."""
        assert repr(user_schema) == "Schema(fields=['name', 'age'])"


class TestComposition:
    """Test schemas built from other validators."""

    def test_nested_schema(self):
        """Test a schema used as a field."""
        address = schema({"city": value(lambda v: ok(v) if v else err("EMPTY_CITY"))})
        user = schema({"name": name_value(), "address": address})

        result = user({"name": "John", "address": {"city": ""}})
        assert result == err({"address": {"city": "EMPTY_CITY"}})

    def test_rule_and_specification_fields(self):
        """Test rules and specifications used as fields."""
        adult = rule("adult", lambda v: ok(v) if v >= 18 else err("MINOR"))
        even = spec().rule(lambda v: ok(v) if v % 2 == 0 else err("ODD")).build()
        checked = schema({"age": adult, "count": even})

        assert checked({"age": 15, "count": 3}) == err({"age": "MINOR", "count": "ODD"})


class TestConstructionPanics:
    """Test misconfigured schemas."""

    @pytest.mark.parametrize("field", [lambda v: ok(v), "value", 42, None, {"nested": "dict"}])
    def test_field_is_not_value(self, field):
        """Test that every field must be a value."""
        with pytest.raises(SchemaPanic) as exc_info:
            schema({"name": field})

        assert exc_info.value.kind == "FIELD_IS_NOT_VALUE"
        assert exc_info.value.context["field"] == "name"

    def test_fields_not_a_mapping(self):
        """Test that fields must be a mapping."""
        with pytest.raises(SchemaPanic) as exc_info:
            Schema([name_value()])

        assert exc_info.value.kind == "FIELD_IS_NOT_VALUE"

    @pytest.mark.parametrize("name", ["_id", "_hash", "_private", 1])
    def test_invalid_field_name(self, name):
        """Test that identity attribute names are reserved."""
        with pytest.raises(SchemaPanic) as exc_info:
            schema({name: name_value()})

        assert exc_info.value.kind == "INVALID_FIELD_NAME"

    def test_field_name_shadowing_attribute(self):
        """Test that a field cannot hide the fields property."""
        with pytest.raises(SchemaPanic) as exc_info:
            schema({"fields": name_value()})

        assert exc_info.value.kind == "INVALID_FIELD_NAME"
        assert exc_info.value.context["field"] == repr("fields")

    def test_forged_value_field(self):
        """Test that a value look-alike is not accepted as a field."""
        forged = name_value()
        object.__setattr__(forged, "_hash", "0" * 64)

        with pytest.raises(SchemaPanic):
            schema({"name": forged})


class TestIsSchema:
    """Test structural schema recognition."""

    def test_genuine(self, user_schema):
        """Test that a schema is recognized right after construction."""
        assert is_schema(user_schema)
        assert is_schema(schema({}))

    def test_same_fields_same_hash(self):
        """Test that identity follows the field structure."""
        name = name_value()
        assert schema({"name": name})._hash == schema("documented", {"name": name})._hash
        assert schema({"name": name})._hash != schema({"other": name})._hash

    def test_field_order_matters(self):
        """Test that the declaration order is part of identity."""
        name, age = name_value(), age_value()
        assert schema({"name": name, "age": age})._hash != schema({"age": age, "name": name})._hash

    def test_tampered_fields(self, user_schema):
        """Test that replacing the fields invalidates the schema."""
        object.__setattr__(user_schema, "_fields", MappingProxyType({"name": name_value()}))
        assert not is_schema(user_schema)

    def test_forged_tag(self, user_schema):
        """Test that an object with a copied tag and hash is rejected."""

        class Forged:
            _id = "Element"
            _tag = "Schema"
            _hash = user_schema._hash
            fields = {"name": name_value()}

            def __call__(self, data):
                return ok(data)

        assert not is_schema(Forged())

    @pytest.mark.parametrize("candidate", [None, {}, "Schema", Schema, name_value()])
    def test_non_schemas(self, candidate):
        """Test that other objects are not schemas."""
        assert not is_schema(candidate)

    def test_metadata(self, user_schema):
        """Test schema metadata."""
        meta = get_element_meta(user_schema)
        assert meta.doc == "User validation schema with name and age fields"
        assert meta.hash == user_schema._hash
