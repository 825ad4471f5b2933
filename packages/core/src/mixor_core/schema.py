"""Schema: object validation composed from named values.

A schema is both a validator for whole objects and a read-only mapping of
its field validators, so a single field can be validated on its own.

Two evaluation modes are supported:

- ``"all"`` (default): every field is evaluated; all failures are collected
  into an error dict keyed by field name.
- ``"strict"``: fields are evaluated in declaration order and validation
  stops at the first failure, returning ``Err({field: error})``.

Example:
    ```python
    from mixor_core import err, ok, schema, value

    user = schema(
        "User validation schema with name and age fields",
        {
            "name": value(lambda v: ok(v) if len(v) > 0 else err("EMPTY_NAME")),
            "age": value(lambda v: ok(v) if v >= 0 else err("INVALID_AGE")),
        },
    )

    user({"name": "", "age": -5})
    # Err({'name': 'EMPTY_NAME', 'age': 'INVALID_AGE'})
    user({"name": "", "age": -5}, mode="strict")
    # Err({'name': 'EMPTY_NAME'})
    user.name("John Doe")
    # Ok('John Doe')
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Literal

from mixor_common.exceptions import SerializationError

from mixor_core.element import has_identity, init_element, readonly_delattr, readonly_setattr
from mixor_core.hashing import fingerprint
from mixor_core.panic import SchemaPanic
from mixor_core.result import Result, err, is_ok, is_result, ok
from mixor_core.specification import is_rule, is_spec
from mixor_core.value import is_value

logger = logging.getLogger(__name__)

SCHEMA_TAG = "Schema"

Mode = Literal["all", "strict"]

FieldValidator = Callable[[Any], Result[Any, Any]]


def _is_field_validator(candidate: Any) -> bool:
    return is_value(candidate) or is_schema(candidate) or is_rule(candidate) or is_spec(candidate)


def _field_input(data: Any, name: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


class Schema:
    """Object validator over a fixed, ordered set of named fields.

    Field validators are reachable as attributes (``schema.email``), by
    subscription (``schema["email"]``) and through ``fields``. Field names may
    not shadow schema attributes such as ``fields``.
    """

    __slots__ = ("_fields", "_id", "_tag", "_hash", "_doc")

    __setattr__ = readonly_setattr
    __delattr__ = readonly_delattr

    def __init__(self, fields: Mapping[str, FieldValidator], doc: str | None = None):
        if not isinstance(fields, Mapping):
            raise SchemaPanic(
                "FIELD_IS_NOT_VALUE",
                f"Schema fields must be a mapping of name to value, got {type(fields).__name__}.",
            )

        checked: dict[str, FieldValidator] = {}
        for name, field in fields.items():
            if not isinstance(name, str) or name.startswith("_") or hasattr(Schema, name):
                raise SchemaPanic(
                    "INVALID_FIELD_NAME",
                    f"Field name {name!r} is invalid; names must be strings not starting with '_' "
                    "and not shadowing schema attributes.",
                    context={"field": repr(name)},
                )
            if not _is_field_validator(field):
                raise SchemaPanic(
                    "FIELD_IS_NOT_VALUE",
                    f'Field "{name}" is not a value.',
                    context={"field": name, "type": type(field).__name__},
                )
            checked[name] = field

        object.__setattr__(self, "_fields", MappingProxyType(checked))
        init_element(self, SCHEMA_TAG, fingerprint("schema", checked), doc)
        logger.debug(f"Created schema with fields: {list(checked)}")

    @property
    def fields(self) -> Mapping[str, FieldValidator]:
        """Read-only mapping of field name to validator, in declaration order."""
        return self._fields

    def __call__(self, data: Any, mode: Mode = "all") -> Result[dict[str, Any], dict[str, Any]]:
        """Validate a whole object.

        Args:
            data: Mapping or object holding the field values; missing fields
                are passed to their validator as None
            mode: ``"all"`` to collect every field error, ``"strict"`` to
                stop at the first one

        Returns:
            ``Ok`` with the validated values keyed by field name, or ``Err``
            with the field errors keyed by field name

        Raises:
            SchemaPanic: On an unknown mode or a field returning a non-result
        """
        if mode == "all":
            return self._validate_all(data)
        if mode == "strict":
            return self._validate_strict(data)
        raise SchemaPanic(
            "INVALID_MODE",
            f"Unknown schema validation mode {mode!r}; expected 'all' or 'strict'.",
            context={"mode": repr(mode)},
        )

    def _run_field(self, name: str, data: Any) -> Result[Any, Any]:
        result = self._fields[name](_field_input(data, name))
        if not is_result(result):
            raise SchemaPanic(
                "RESULT_EXPECTED",
                f'Field "{name}" returned {type(result).__name__} instead of a result.',
                context={"field": name},
            )
        return result

    def _validate_all(self, data: Any) -> Result[dict[str, Any], dict[str, Any]]:
        values: dict[str, Any] = {}
        errors: dict[str, Any] = {}
        for name in self._fields:
            result = self._run_field(name, data)
            if is_ok(result):
                values[name] = result.value
            else:
                errors[name] = result.error
        return err(errors) if errors else ok(values)

    def _validate_strict(self, data: Any) -> Result[dict[str, Any], dict[str, Any]]:
        values: dict[str, Any] = {}
        for name in self._fields:
            result = self._run_field(name, data)
            if not is_ok(result):
                return err({name: result.error})
            values[name] = result.value
        return ok(values)

    def __getitem__(self, name: str) -> FieldValidator:
        return self._fields[name]

    def __getattr__(self, name: str) -> FieldValidator:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(f"Schema has no field {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Schema(fields={list(self._fields)!r})"


def schema(
    doc_or_fields: str | Mapping[str, FieldValidator],
    fields: Mapping[str, FieldValidator] | None = None,
) -> Schema:
    """Create a schema from a mapping of fields, optionally documented.

    Args:
        doc_or_fields: The field mapping, or a documentation string when
            ``fields`` is given
        fields: The field mapping when a documentation string is given

    Returns:
        A new Schema

    Raises:
        SchemaPanic: If a field is not a value or a field name is invalid
    """
    if isinstance(doc_or_fields, str):
        return Schema(fields if fields is not None else {}, doc=doc_or_fields)
    return Schema(doc_or_fields)


def is_schema(candidate: Any) -> bool:
    """Check whether a candidate is a genuine schema.

    The candidate must be callable, carry the ``Schema`` tag, and its stored
    hash must match the hash recomputed over its current fields. Objects that
    only imitate the tag, or schemas whose fields were tampered with, fail.
    """
    if not callable(candidate) or not has_identity(candidate, SCHEMA_TAG):
        return False
    fields = getattr(candidate, "fields", None)
    if not isinstance(fields, Mapping):
        return False
    try:
        return candidate._hash == fingerprint("schema", dict(fields))
    except SerializationError:
        return False


__all__ = ["Schema", "schema", "is_schema", "Mode"]
