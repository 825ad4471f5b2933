"""Ready-made values for common field checks.

Every builder returns a documented ``Value``. Failures use short uppercase
error tokens; pass ``error=`` to replace the token a builder produces. Apart
from ``required``, builders let ``None`` through so optional fields can be
combined with ``required`` explicitly.

Example:
    ```python
    from mixor_core import schema
    from mixor_values import chain, length, number_range, pattern, required

    user = schema({
        "username": chain(required(), length(min=3, max=20), pattern(r"^[a-z0-9_]+$")),
        "age": number_range(min=13, max=120),
    })
    ```
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable
from numbers import Number
from re import Pattern as RegexPattern
from typing import Any

from mixor_core.result import Result, err, is_err, ok
from mixor_core.value import Value, value


def required(allow_empty: bool = False, error: str | None = None) -> Value[Any, str]:
    """Field must be present and non-null.

    Args:
        allow_empty: If True, empty strings/collections are allowed
        error: Token replacing ``REQUIRED``/``EMPTY``
    """

    def check(raw: Any) -> Result[Any, str]:
        if raw is None:
            return err(error or "REQUIRED")
        if not allow_empty and isinstance(raw, (str, list, dict, set, tuple)) and len(raw) == 0:
            return err(error or "EMPTY")
        return ok(raw)

    return value("Value is required" if allow_empty else "Value is required and not empty", check)


def length(min: int | None = None, max: int | None = None, error: str | None = None) -> Value[Any, str]:
    """String/collection length must be in the given inclusive range.

    Raises:
        ValueError: If the bounds are negative or inverted
    """
    if min is not None and min < 0:
        raise ValueError(f"min length cannot be negative: {min}")
    if max is not None and max < 0:
        raise ValueError(f"max length cannot be negative: {max}")
    if min is not None and max is not None and min > max:
        raise ValueError(f"min length ({min}) cannot be greater than max ({max})")

    def check(raw: Any) -> Result[Any, str]:
        if raw is None:
            return ok(raw)
        if not hasattr(raw, "__len__"):
            return err(error or "NO_LENGTH")
        size = len(raw)
        if min is not None and size < min:
            return err(error or "TOO_SHORT")
        if max is not None and size > max:
            return err(error or "TOO_LONG")
        return ok(raw)

    return value(_describe_bounds("Length", min, max), check)


def number_range(
    min: Number | None = None,
    max: Number | None = None,
    min_exclusive: bool = False,
    max_exclusive: bool = False,
    error: str | None = None,
) -> Value[Any, str]:
    """Numeric value must be in the given range (inclusive by default).

    Booleans are not numbers here, and NaN never satisfies a range.

    Raises:
        ValueError: If ``min`` is greater than ``max``
    """
    if min is not None and max is not None and float(min) > float(max):  # type: ignore[arg-type]
        raise ValueError(f"min ({min}) cannot be greater than max ({max})")

    def check(raw: Any) -> Result[Any, str]:
        if raw is None:
            return ok(raw)
        if isinstance(raw, bool) or not isinstance(raw, Number):
            return err(error or "NOT_A_NUMBER")
        if isinstance(raw, float) and math.isnan(raw):
            return err(error or "NOT_A_NUMBER")
        number = float(raw)  # type: ignore[arg-type]
        if min is not None:
            low = float(min)  # type: ignore[arg-type]
            if number < low or (min_exclusive and number == low):
                return err(error or "TOO_SMALL")
        if max is not None:
            high = float(max)  # type: ignore[arg-type]
            if number > high or (max_exclusive and number == high):
                return err(error or "TOO_LARGE")
        return ok(raw)

    return value(_describe_bounds("Number", min, max, min_exclusive, max_exclusive), check)


def pattern(regex: str | RegexPattern, error: str | None = None) -> Value[Any, str]:
    """String value must match the regex (anchored at the start, like ``re.match``)."""
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def check(raw: Any) -> Result[Any, str]:
        if raw is None:
            return ok(raw)
        if not isinstance(raw, str):
            return err(error or "NOT_A_STRING")
        if not compiled.match(raw):
            return err(error or "PATTERN_MISMATCH")
        return ok(raw)

    return value(f"Matches pattern {compiled.pattern!r}", check)


def one_of(values: Iterable[Any], case_sensitive: bool = True, error: str | None = None) -> Value[Any, str]:
    """Value must be in the allowed set.

    Raises:
        ValueError: If no allowed value is given
    """
    allowed_values = list(values)
    if not allowed_values:
        raise ValueError("one_of requires at least one allowed value")
    if case_sensitive:
        allowed = tuple(allowed_values)
    else:
        allowed = tuple(v.lower() if isinstance(v, str) else v for v in allowed_values)

    def check(raw: Any) -> Result[Any, str]:
        if raw is None:
            return ok(raw)
        candidate = raw.lower() if not case_sensitive and isinstance(raw, str) else raw
        if candidate not in allowed:
            return err(error or "NOT_ALLOWED")
        return ok(raw)

    return value(f"One of {', '.join(repr(v) for v in allowed_values)}", check)


def instance_of(*types: type, error: str | None = None) -> Value[Any, str]:
    """Value must be an instance of one of the given types.

    ``bool`` is rejected where ``int`` or ``float`` is expected unless
    ``bool`` is listed explicitly.
    """
    if not types:
        raise ValueError("instance_of requires at least one type")

    def check(raw: Any) -> Result[Any, str]:
        if raw is None:
            return ok(raw)
        if isinstance(raw, bool) and bool not in types:
            return err(error or "INVALID_TYPE")
        if not isinstance(raw, types):
            return err(error or "INVALID_TYPE")
        return ok(raw)

    return value(f"Instance of {', '.join(t.__name__ for t in types)}", check)


def predicate(test: Callable[[Any], bool], error: str = "INVALID", doc: str | None = None) -> Value[Any, str]:
    """Wrap a boolean test into a value failing with ``error``."""

    def check(raw: Any) -> Result[Any, str]:
        return ok(raw) if test(raw) else err(error)

    return value(doc or f"Satisfies {getattr(test, '__name__', 'predicate')}", check)


def chain(*values: Callable[[Any], Result[Any, Any]], doc: str | None = None) -> Value[Any, Any]:
    """Compose values into one, evaluated in order and stopping at the first error.

    The success value of each step is the input of the next, so a chain may
    normalize its input before checking it.
    """
    steps = tuple(values)
    if not steps:
        raise ValueError("chain requires at least one value")

    def check(raw: Any) -> Result[Any, Any]:
        current = raw
        for step in steps:
            result = step(current)
            if is_err(result):
                return result
            current = result.value
        return ok(current)

    return value(doc or " then ".join(_describe(step) for step in steps), check)


def _describe_bounds(
    subject: str,
    min: Any,
    max: Any,
    min_exclusive: bool = False,
    max_exclusive: bool = False,
) -> str:
    """Describe a range using only the bounds that were given."""
    if min is not None and max is not None and not (min_exclusive or max_exclusive):
        return f"{subject} between {min} and {max}"
    limits = []
    if min is not None:
        limits.append(f"greater than {min}" if min_exclusive else f"at least {min}")
    if max is not None:
        limits.append(f"less than {max}" if max_exclusive else f"at most {max}")
    if not limits:
        return f"Any {subject.lower()}"
    return f"{subject} {' and '.join(limits)}"


def _describe(step: Any) -> str:
    doc = getattr(step, "_doc", None)
    return doc if isinstance(doc, str) else getattr(step, "__name__", "value")


__all__ = [
    "required",
    "length",
    "number_range",
    "pattern",
    "one_of",
    "instance_of",
    "predicate",
    "chain",
]
