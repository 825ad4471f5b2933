"""Panics: fatal errors for misconfigured validators.

A panic signals a defect in the calling code, such as a schema field that is
not a Value. Panics are raised, never returned, and are not meant to be
pattern-matched by business logic; expected validation failures travel as
``Err`` results instead.

Each panic family is namespaced by the module that owns it and declares the
kinds it may raise:

    ```python
    class SchemaPanic(Panic):
        scope = "SCHEMA"
        kinds = frozenset({"FIELD_IS_NOT_VALUE"})

    raise SchemaPanic("FIELD_IS_NOT_VALUE", 'Field "name" is not a value.')
    # SchemaPanic: [SCHEMA:FIELD_IS_NOT_VALUE] Field "name" is not a value.
    ```
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet

from mixor_common.exceptions import ConfigurationError


class Panic(ConfigurationError):
    """Base class of every panic family.

    Attributes:
        scope: Owning module of the family (class attribute)
        kinds: Kinds the family may raise (class attribute)
        kind: Kind of this panic
        code: ``"<SCOPE>:<KIND>"``
    """

    scope: ClassVar[str] = "PANIC"
    kinds: ClassVar[FrozenSet[str]] = frozenset()

    def __init__(self, kind: str, message: str, context: Dict[str, Any] | None = None):
        if kind not in self.kinds:
            raise ValueError(f"{type(self).__name__} has no kind {kind!r}; expected one of {sorted(self.kinds)}")
        self.kind = kind
        self.code = f"{self.scope}:{kind}"
        self.message = message
        super().__init__(
            f"[{self.code}] {message}",
            context={**(context or {}), "scope": self.scope, "kind": kind},
        )


class ValuePanic(Panic):
    scope = "VALUE"
    kinds = frozenset({"VALIDATOR_IS_NOT_CALLABLE"})


class SchemaPanic(Panic):
    scope = "SCHEMA"
    kinds = frozenset({
        # A schema field is not a value.
        "FIELD_IS_NOT_VALUE",
        # A field name is not a string or collides with a schema attribute.
        "INVALID_FIELD_NAME",
        # A field validator returned something other than a result.
        "RESULT_EXPECTED",
        # A validation mode other than "all" or "strict".
        "INVALID_MODE",
    })


class SpecificationPanic(Panic):
    scope = "SPECIFICATION"
    kinds = frozenset({
        "ALREADY_BUILT",
        "RULE_IS_NOT_CALLABLE",
        "INVALID_RULE_NAME",
        "PREDICATE_IS_NOT_CALLABLE",
        "NOT_A_SPECIFICATION",
        # A rule returned something other than a result.
        "RESULT_EXPECTED",
    })


__all__ = ["Panic", "ValuePanic", "SchemaPanic", "SpecificationPanic"]
