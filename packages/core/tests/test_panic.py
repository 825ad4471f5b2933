"""Tests for panics."""

import pytest

from mixor_common.exceptions import ConfigurationError, MixorError
from mixor_core.panic import Panic, SchemaPanic, SpecificationPanic, ValuePanic


class TestPanic:
    """Test panic construction and formatting."""

    def test_code_and_message(self):
        """Test that the code is namespaced by the family scope."""
        panic = SchemaPanic("FIELD_IS_NOT_VALUE", 'Field "name" is not a value.')
        assert panic.kind == "FIELD_IS_NOT_VALUE"
        assert panic.code == "SCHEMA:FIELD_IS_NOT_VALUE"
        assert panic.message == 'Field "name" is not a value.'
        assert str(panic) == '[SCHEMA:FIELD_IS_NOT_VALUE] Field "name" is not a value.'

    def test_context(self):
        """Test that the context carries scope and kind."""
        panic = SpecificationPanic("ALREADY_BUILT", "Builder is finalized.", context={"operation": "rule"})
        assert panic.context == {"operation": "rule", "scope": "SPECIFICATION", "kind": "ALREADY_BUILT"}

    def test_unknown_kind(self):
        """Test that a family only raises its declared kinds."""
        with pytest.raises(ValueError, match="has no kind"):
            ValuePanic("FIELD_IS_NOT_VALUE", "wrong family")

    @pytest.mark.parametrize("family", [ValuePanic, SchemaPanic, SpecificationPanic])
    def test_hierarchy(self, family):
        """Test that panics are configuration errors."""
        kind = sorted(family.kinds)[0]
        with pytest.raises(ConfigurationError) as exc_info:
            raise family(kind, "misuse")

        assert isinstance(exc_info.value, Panic)
        assert isinstance(exc_info.value, MixorError)

    def test_declared_kinds(self):
        """Test the kinds declared by each family."""
        assert ValuePanic.kinds == {"VALIDATOR_IS_NOT_CALLABLE"}
        assert SchemaPanic.kinds == {"FIELD_IS_NOT_VALUE", "INVALID_FIELD_NAME", "RESULT_EXPECTED", "INVALID_MODE"}
        assert SpecificationPanic.kinds == {
            "ALREADY_BUILT",
            "RULE_IS_NOT_CALLABLE",
            "PREDICATE_IS_NOT_CALLABLE",
            "NOT_A_SPECIFICATION",
            "RESULT_EXPECTED",
            "INVALID_RULE_NAME",
        }
