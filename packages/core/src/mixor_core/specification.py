"""Specifications: reusable, conditionally applicable business rules.

A specification is built from an optional applicability predicate and an
ordered chain of rules. ``satisfy`` is fail-fast: the first failing rule's
error is returned and the remaining rules are not evaluated. When the
predicate rejects the input the specification does not apply and is
satisfied vacuously.

Specifications combine without mutation: ``not_``, ``and_`` (``&``) and
``or_`` (``|``) each return a new specification.

Example:
    ```python
    from mixor_core import err, ok, spec

    admin = (
        spec()
        .when(lambda u: u["role"] == "Admin")
        .rule("should have management permission",
              lambda u: ok(u) if "manage_users" in u["permissions"] else err("NO_PERMISSION"))
        .rule("should have corporate email",
              lambda u: ok(u) if u["email"].endswith("@company.com") else err("NO_CORPORATE_EMAIL"))
        .build()
    )

    admin.satisfy(user)
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from mixor_common.exceptions import SerializationError

from mixor_core.element import has_identity, init_element, readonly_delattr, readonly_setattr
from mixor_core.hashing import fingerprint
from mixor_core.panic import SpecificationPanic
from mixor_core.result import Result, err, is_err, is_ok, is_result, ok

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")

RULE_TAG = "Rule"
SPECIFICATION_TAG = "Specification"


class Rule(Generic[T, E]):
    """A named (or anonymous) validator over a domain object.

    Rules are usable on their own or as links of a specification chain. The
    name doubles as the rule's documentation.
    """

    __slots__ = ("_fn", "_id", "_tag", "_hash", "_doc")

    __setattr__ = readonly_setattr
    __delattr__ = readonly_delattr

    def __init__(self, fn: Callable[[T], Result[T, E]], name: str | None = None):
        if not callable(fn):
            raise SpecificationPanic(
                "RULE_IS_NOT_CALLABLE",
                f"Rule {name!r} must be callable, got {type(fn).__name__}.",
                context={"rule": name},
            )
        if name is not None and not isinstance(name, str):
            raise SpecificationPanic(
                "INVALID_RULE_NAME",
                f"Rule name must be a string, got {type(name).__name__}.",
                context={"type": type(name).__name__},
            )
        object.__setattr__(self, "_fn", fn)
        init_element(self, RULE_TAG, fingerprint("rule", fn), name)

    @property
    def name(self) -> str | None:
        return self._doc

    def __call__(self, target: T) -> Result[T, E]:
        return self._fn(target)

    def __repr__(self) -> str:
        return f"Rule({self._doc!r})" if self._doc else f"Rule(<{self._hash[:12]}>)"


def rule(name_or_fn: str | Callable[[T], Result[T, E]], fn: Callable[[T], Result[T, E]] | None = None) -> Rule[T, E]:
    """Create a standalone rule, optionally named.

    Example:
        ```python
        has_permission = rule(
            "User must have management permission",
            lambda u: ok(u) if "manage_users" in u.permissions else err("NO_PERMISSION"),
        )
        has_permission(user)
        ```
    """
    if fn is None:
        return Rule(name_or_fn)  # type: ignore[arg-type]
    return Rule(fn, name=name_or_fn)  # type: ignore[arg-type]


def is_rule(candidate: Any) -> bool:
    """Check whether a candidate is a genuine rule (tag and recomputed hash)."""
    if not callable(candidate) or not has_identity(candidate, RULE_TAG):
        return False
    try:
        return candidate._hash == fingerprint("rule", getattr(candidate, "_fn", None))
    except SerializationError:
        return False


def _structure(when: Any, rules: Any, composition: Any) -> dict[str, Any]:
    return {"when": when, "rules": rules, "composition": composition}


class Specification(Generic[T, E]):
    """A built, immutable specification.

    Leaf specifications hold an optional predicate and a rule chain.
    Combined specifications hold a composition ``(operator, operands...)``
    instead and delegate to their operands.
    """

    __slots__ = ("_when", "_rules", "_composition", "_id", "_tag", "_hash", "_doc")

    __setattr__ = readonly_setattr
    __delattr__ = readonly_delattr

    def __init__(
        self,
        when: Callable[[T], bool] | None = None,
        rules: tuple[Rule[T, Any], ...] = (),
        composition: tuple[Any, ...] | None = None,
        doc: str | None = None,
    ):
        rules = tuple(rules)
        object.__setattr__(self, "_when", when)
        object.__setattr__(self, "_rules", rules)
        object.__setattr__(self, "_composition", composition)
        init_element(
            self,
            SPECIFICATION_TAG,
            fingerprint("specification", _structure(when, rules, composition)),
            doc,
        )

    @property
    def rules(self) -> tuple[Rule[T, Any], ...]:
        """The declared rule chain, in evaluation order."""
        return self._rules

    def satisfy(self, target: T) -> Result[T, E]:
        """Evaluate the specification against ``target``.

        Returns:
            ``Ok(target)`` when the specification does not apply or every
            rule passes, otherwise the ``Err`` of the first failing rule
        """
        if self._composition is not None:
            return self._satisfy_composition(target)

        if self._when is not None and not self._when(target):
            return ok(target)

        for link in self._rules:
            result = link(target)
            if not is_result(result):
                raise SpecificationPanic(
                    "RESULT_EXPECTED",
                    f"Rule {link.name!r} returned {type(result).__name__} instead of a result.",
                    context={"rule": link.name},
                )
            if is_err(result):
                return result
        return ok(target)

    __call__ = satisfy

    def _satisfy_composition(self, target: T) -> Result[T, E]:
        operator = self._composition[0]
        if operator == "not":
            _, operand, error = self._composition
            return err(error) if is_ok(operand.satisfy(target)) else ok(target)

        _, left, right = self._composition
        result = left.satisfy(target)
        if operator == "and":
            return result if is_err(result) else right.satisfy(target)
        # "or": success of the left operand wins, otherwise the right decides.
        return result if is_ok(result) else right.satisfy(target)

    def not_(self, error: Any) -> Specification[T, Any]:
        """Negate the specification, failing with ``error`` when it is satisfied."""
        return Specification(composition=("not", self, error))

    def and_(self, other: Specification[T, Any]) -> Specification[T, Any]:
        """Both specifications must be satisfied; the first error reached wins."""
        _require_spec(other, "and")
        return Specification(composition=("and", self, other))

    def or_(self, other: Specification[T, Any]) -> Specification[T, Any]:
        """Either specification must be satisfied.

        When both fail, the error of ``other`` is returned.
        """
        _require_spec(other, "or")
        return Specification(composition=("or", self, other))

    __and__ = and_
    __or__ = or_

    def __repr__(self) -> str:
        if self._composition is not None:
            return f"Specification({self._composition[0]}, <{self._hash[:12]}>)"
        return f"Specification(rules={[r.name for r in self._rules]!r})"


def _require_spec(other: Any, operator: str) -> None:
    if not is_spec(other):
        raise SpecificationPanic(
            "NOT_A_SPECIFICATION",
            f"Cannot combine with {type(other).__name__} using '{operator}': operand is not a specification.",
            context={"operator": operator},
        )


class SpecBuilder(Generic[T]):
    """Mutable builder collecting a predicate and rules until ``build``.

    After ``build`` the builder is finalized; any further call panics.
    """

    def __init__(self, doc: str | None = None) -> None:
        self._doc = doc
        self._when: Callable[[T], bool] | None = None
        self._rules: list[Rule[T, Any]] = []
        self._built = False

    def _ensure_open(self, operation: str) -> None:
        if self._built:
            raise SpecificationPanic(
                "ALREADY_BUILT",
                f"Cannot call '{operation}' on a specification builder that was already built.",
                context={"operation": operation},
            )

    def when(self, predicate: Callable[[T], bool]) -> SpecBuilder[T]:
        """Set (or replace) the applicability predicate.

        Args:
            predicate: Callable returning True when the specification applies

        Returns:
            Self for chaining
        """
        self._ensure_open("when")
        if not callable(predicate):
            raise SpecificationPanic(
                "PREDICATE_IS_NOT_CALLABLE",
                f"Specification predicate must be callable, got {type(predicate).__name__}.",
            )
        self._when = predicate
        return self

    def rule(
        self,
        name_or_fn: str | Callable[[T], Result[T, Any]] | Rule[T, Any],
        fn: Callable[[T], Result[T, Any]] | None = None,
    ) -> SpecBuilder[T]:
        """Append a named or anonymous rule to the chain.

        Args:
            name_or_fn: The rule name, or the rule function/``Rule`` itself
            fn: The rule function when a name is given

        Returns:
            Self for chaining
        """
        self._ensure_open("rule")
        if fn is None and is_rule(name_or_fn):
            self._rules.append(name_or_fn)  # type: ignore[arg-type]
        elif fn is None:
            self._rules.append(Rule(name_or_fn))  # type: ignore[arg-type]
        else:
            self._rules.append(Rule(fn, name=name_or_fn))  # type: ignore[arg-type]
        return self

    def build(self) -> Specification[T, Any]:
        """Finalize the builder into an immutable specification."""
        self._ensure_open("build")
        self._built = True
        built: Specification[T, Any] = Specification(when=self._when, rules=tuple(self._rules), doc=self._doc)
        logger.debug(f"Built specification with {len(self._rules)} rule(s), conditional={self._when is not None}")
        return built


def spec(doc: str | None = None) -> SpecBuilder[Any]:
    """Start a new specification builder."""
    return SpecBuilder(doc)


def is_spec(candidate: Any) -> bool:
    """Check whether a candidate is a genuine specification.

    The candidate must be callable, carry the ``Specification`` tag, and its
    stored hash must match the hash recomputed from its predicate, rules and
    composition.
    """
    if not callable(candidate) or not has_identity(candidate, SPECIFICATION_TAG):
        return False
    structure = _structure(
        getattr(candidate, "_when", None),
        getattr(candidate, "_rules", ()),
        getattr(candidate, "_composition", None),
    )
    try:
        return candidate._hash == fingerprint("specification", structure)
    except SerializationError:
        return False


__all__ = [
    "Rule",
    "SpecBuilder",
    "Specification",
    "is_rule",
    "is_spec",
    "rule",
    "spec",
]
