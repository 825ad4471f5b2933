"""Factory building schemas from configuration."""

from __future__ import annotations

import logging
from typing import Any

from mixor_common.exceptions import ConfigurationError, NotFoundError
from mixor_common.factory import FactoryBase
from mixor_core.result import ok
from mixor_core.schema import Schema
from mixor_core.value import Value, value

from .values import chain, instance_of, length, number_range, one_of, pattern, required

logger = logging.getLogger(__name__)

TYPE_NAMES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "list": (list, tuple),
    "mapping": (dict,),
}


class SchemaFactory(FactoryBase):
    """Factory for creating schemas from configuration.

    Configuration Options:
        description (str): Optional schema documentation
        fields (list): List of field definitions

    Field Definition Options:
        name (str): Field name
        description (str): Optional field documentation
        values (list): Value definitions, evaluated in order; the first
            failure is the field's error

    Value Definition Options:
        type (str): One of ``required``, ``length``, ``range``, ``pattern``,
            ``one_of``, ``type``
        error (str): Optional error token replacing the default one
        ...: Parameters of the value type (``min``/``max``, ``pattern``,
            ``values``, ``case_sensitive``, ``allow_empty``, ``of``)

    Example Configuration:
        description: User registration schema
        fields:
          - name: username
            values:
              - type: required
              - type: length
                min: 3
                max: 20
              - type: pattern
                pattern: "^[a-zA-Z0-9_]+$"
          - name: age
            values:
              - type: type
                of: integer
              - type: range
                min: 13
                max: 120
    """

    def create(self, **config: Any) -> Schema:
        """Create a Schema instance from configuration.

        Args:
            **config: Schema configuration

        Returns:
            Schema instance

        Raises:
            ConfigurationError: If a field definition is malformed
            NotFoundError: If a value type is unknown
        """
        description = config.get("description")
        fields_config = config.get("fields", [])
        if not isinstance(fields_config, list):
            raise ConfigurationError(
                f"'fields' must be a list, got {type(fields_config).__name__}",
                context={"fields": type(fields_config).__name__},
            )

        fields: dict[str, Value[Any, Any]] = {}
        for index, field_config in enumerate(fields_config):
            name = field_config.get("name") if isinstance(field_config, dict) else None
            if not name:
                raise ConfigurationError(
                    "Field configuration missing 'name'",
                    context={"index": index},
                )
            if name in fields:
                raise ConfigurationError(f"Duplicate field '{name}'", context={"field": name})
            fields[name] = self._build_field(name, field_config)

        logger.info(f"Creating schema with fields: {list(fields)}")
        return Schema(fields, doc=description)

    def _build_field(self, name: str, field_config: dict[str, Any]) -> Value[Any, Any]:
        """Combine the value definitions of a field into one value."""
        values = [self._build_value(name, value_config) for value_config in field_config.get("values") or []]
        description = field_config.get("description")
        if not values:
            return value(description or f"Any value for {name}", ok)
        if len(values) == 1 and description is None:
            return values[0]
        return chain(*values, doc=description)

    def _build_value(self, field_name: str, config: dict[str, Any]) -> Value[Any, Any]:
        """Build a single value from its definition.

        Args:
            field_name: Name of the owning field (for error context)
            config: Value definition

        Returns:
            Value instance
        """
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Value definition for field '{field_name}' must be a mapping",
                context={"field": field_name, "type": type(config).__name__},
            )
        value_type = str(config.get("type", "")).lower()
        error = config.get("error")

        if value_type == "required":
            return required(allow_empty=config.get("allow_empty", False), error=error)
        if value_type == "length":
            return length(min=config.get("min"), max=config.get("max"), error=error)
        if value_type == "range":
            return number_range(
                min=config.get("min"),
                max=config.get("max"),
                min_exclusive=config.get("min_exclusive", False),
                max_exclusive=config.get("max_exclusive", False),
                error=error,
            )
        if value_type == "pattern":
            regex = config.get("pattern")
            if not regex:
                raise ConfigurationError(
                    f"Pattern value for field '{field_name}' missing 'pattern'",
                    context={"field": field_name},
                )
            return pattern(regex, error=error)
        if value_type == "one_of":
            return one_of(config.get("values", []), case_sensitive=config.get("case_sensitive", True), error=error)
        if value_type == "type":
            type_name = str(config.get("of", "")).lower()
            if type_name not in TYPE_NAMES:
                logger.warning(f"Unknown type name '{type_name}' for field '{field_name}'")
                raise NotFoundError(
                    f"Unknown type name: '{type_name}'",
                    context={"field": field_name, "type": type_name, "available": sorted(TYPE_NAMES)},
                )
            return instance_of(*TYPE_NAMES[type_name], error=error)

        logger.warning(f"Unknown value type '{value_type}' for field '{field_name}'")
        raise NotFoundError(
            f"Unknown value type: '{value_type}'",
            context={
                "field": field_name,
                "type": value_type,
                "available": ["length", "one_of", "pattern", "range", "required", "type"],
            },
        )


# Create singleton instance for registration
schema_factory = SchemaFactory()
