"""Value: an atomic single-field validator with identity metadata.

Example:
    ```python
    from mixor_core import err, ok, value

    name = value(
        "Non-empty display name",
        lambda v: ok(v) if isinstance(v, str) and v else err("EMPTY_NAME"),
    )
    name("Ada")  # Ok('Ada')
    name("")     # Err('EMPTY_NAME')
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from mixor_common.exceptions import SerializationError

from mixor_core.element import has_identity, init_element, readonly_delattr, readonly_setattr
from mixor_core.hashing import fingerprint
from mixor_core.panic import ValuePanic
from mixor_core.result import Result

T = TypeVar("T")
E = TypeVar("E")

VALUE_TAG = "Value"


class Value(Generic[T, E]):
    """Callable wrapper around a validator function ``raw -> Result``.

    Calling the value invokes the wrapped function directly. The hash is
    computed from the function alone; the documentation does not take part
    in identity.
    """

    __slots__ = ("_fn", "_id", "_tag", "_hash", "_doc")

    __setattr__ = readonly_setattr
    __delattr__ = readonly_delattr

    def __init__(self, fn: Callable[[Any], Result[T, E]], doc: str | None = None):
        if not callable(fn):
            raise ValuePanic(
                "VALIDATOR_IS_NOT_CALLABLE",
                f"Value validator must be callable, got {type(fn).__name__}.",
            )
        object.__setattr__(self, "_fn", fn)
        init_element(self, VALUE_TAG, fingerprint("value", fn), doc)

    @property
    def doc(self) -> str | None:
        return self._doc

    @property
    def hash(self) -> str:
        return self._hash

    def __call__(self, raw: Any) -> Result[T, E]:
        return self._fn(raw)

    def __repr__(self) -> str:
        if self._doc:
            return f"Value({self._doc!r})"
        return f"Value(<{self._hash[:12]}>)"


def value(doc_or_fn: str | Callable[[Any], Result[T, E]], fn: Callable[[Any], Result[T, E]] | None = None) -> Value[T, E]:
    """Create a value from a validator function, optionally documented.

    Args:
        doc_or_fn: The validator function, or a documentation string when
            ``fn`` is given
        fn: The validator function when a documentation string is given

    Returns:
        A new Value

    Raises:
        ValuePanic: If the validator is not callable
    """
    if fn is None:
        return Value(doc_or_fn)  # type: ignore[arg-type]
    return Value(fn, doc=doc_or_fn)  # type: ignore[arg-type]


def is_value(candidate: Any) -> bool:
    """Check whether a candidate is a genuine value.

    The candidate must be callable, carry the ``Value`` tag, and its stored
    hash must match the hash recomputed from its validator function.
    """
    if not callable(candidate) or not has_identity(candidate, VALUE_TAG):
        return False
    try:
        return candidate._hash == fingerprint("value", getattr(candidate, "_fn", None))
    except SerializationError:
        return False


__all__ = ["Value", "value", "is_value"]
