"""Result type: a two-variant success/failure container.

A ``Result`` is either ``Ok(value)`` or ``Err(error)``. Both variants carry
the shared discriminant ``_id = "Result"`` and a ``_tag`` naming the variant,
so well-formed results can be recognized structurally with ``is_result``.

Example:
    ```python
    from mixor_core.result import err, is_ok, ok, unwrap

    def parse_age(raw):
        return ok(raw) if isinstance(raw, int) and raw >= 0 else err("INVALID_AGE")

    result = parse_age(-1)
    if not is_ok(result):
        unwrap(result)  # 'INVALID_AGE'
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")

RESULT_ID = "Result"

_MISSING = object()


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result holding ``value``."""

    _id: ClassVar[str] = RESULT_ID
    _tag: ClassVar[str] = "Ok"

    value: T

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check success."""
        return True

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result holding ``error``."""

    _id: ClassVar[str] = RESULT_ID
    _tag: ClassVar[str] = "Err"

    error: E

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check success."""
        return False

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    """Create a successful result with the given value."""
    return Ok(value)


def err(error: E) -> Err[E]:
    """Create a failed result with the given error.

    By convention errors are short uppercase tokens such as ``"EMPTY_NAME"``
    or structured records (dicts) keyed by field name.
    """
    return Err(error)


def is_ok(result: Result[Any, Any]) -> bool:
    """Check whether a result is the ``Ok`` variant."""
    return getattr(result, "_tag", None) == "Ok"


def is_err(result: Result[Any, Any]) -> bool:
    """Check whether a result is the ``Err`` variant."""
    return getattr(result, "_tag", None) == "Err"


def _member(candidate: Any, name: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name, _MISSING)
    return getattr(candidate, name, _MISSING)


def is_result(candidate: Any) -> bool:
    """Check whether a value is a well-formed result.

    The candidate (an object or a mapping) must carry the ``Result``
    discriminant, a ``_tag`` of ``"Ok"`` or ``"Err"``, and exactly the
    payload that matches its tag: ``value`` for ``Ok`` and ``error`` for
    ``Err``. Objects carrying both payloads or neither are rejected.

    Args:
        candidate: Any value

    Returns:
        True if the value is a result with the correct structure
    """
    if candidate is None or isinstance(candidate, (str, bytes, int, float)):
        return False
    if _member(candidate, "_id") != RESULT_ID:
        return False

    tag = _member(candidate, "_tag")
    has_value = _member(candidate, "value") is not _MISSING
    has_error = _member(candidate, "error") is not _MISSING
    if tag == "Ok":
        return has_value and not has_error
    if tag == "Err":
        return has_error and not has_value
    return False


def unwrap(result: Result[T, E]) -> T | E:
    """Return the value of an ``Ok`` result or the error of an ``Err`` result.

    Mostly useful in tests and diagnostics where both branches are inspected
    the same way.
    """
    return result.value if is_ok(result) else result.error  # type: ignore[union-attr]


__all__ = [
    "Ok",
    "Err",
    "Result",
    "ok",
    "err",
    "is_ok",
    "is_err",
    "is_result",
    "unwrap",
]
