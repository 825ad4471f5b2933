"""Identity metadata shared by all validator elements.

Values, schemas, rules and specifications do not share a base class. They
share a convention: each carries the read-only attributes ``_id``
(always ``"Element"``), ``_tag`` (its kind), ``_hash`` (structural
fingerprint) and ``_doc`` (optional description). ``get_element_meta`` is
the single way to read that metadata without caring about the kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mixor_core.hashing import ELEMENT_ID

IDENTITY_FIELDS = ("_id", "_tag", "_hash", "_doc")


@dataclass(frozen=True)
class ElementMeta:
    """Identity metadata of an element.

    Attributes:
        id: Fixed discriminant, ``"Element"``
        tag: Element kind (``"Value"``, ``"Schema"``, ``"Rule"``, ``"Specification"``)
        hash: Structural fingerprint computed at construction
        doc: Optional human description
    """

    id: str
    tag: str
    hash: str
    doc: str | None = None


def init_element(element: Any, tag: str, hash: str, doc: str | None) -> None:
    """Write identity metadata onto a freshly constructed element."""
    object.__setattr__(element, "_id", ELEMENT_ID)
    object.__setattr__(element, "_tag", tag)
    object.__setattr__(element, "_hash", hash)
    object.__setattr__(element, "_doc", doc)


def readonly_setattr(element: Any, name: str, value: Any) -> None:
    """``__setattr__`` for elements: every attribute is fixed after construction."""
    raise AttributeError(f"{type(element).__name__} is immutable; cannot set {name!r}")


def readonly_delattr(element: Any, name: str) -> None:
    """``__delattr__`` for elements."""
    raise AttributeError(f"{type(element).__name__} is immutable; cannot delete {name!r}")


def has_identity(candidate: Any, tag: str) -> bool:
    """Check the discriminant and tag of a candidate element."""
    return (
        candidate is not None
        and not isinstance(candidate, type)
        and getattr(candidate, "_id", None) == ELEMENT_ID
        and getattr(candidate, "_tag", None) == tag
        and isinstance(getattr(candidate, "_hash", None), str)
    )


def get_element_meta(element: Any) -> ElementMeta | None:
    """Return the identity metadata of any element.

    Args:
        element: A value, schema, rule or specification

    Returns:
        ElementMeta, or None if the argument carries no identity metadata

    Example:
        ```python
        has_permission = rule("User must have management permission", check)
        get_element_meta(has_permission).doc
        # 'User must have management permission'
        ```
    """
    if element is None or isinstance(element, type):
        return None
    if getattr(element, "_id", None) != ELEMENT_ID:
        return None

    tag = getattr(element, "_tag", None)
    hash = getattr(element, "_hash", None)
    doc = getattr(element, "_doc", None)
    if not isinstance(tag, str) or not isinstance(hash, str):
        return None
    if doc is not None and not isinstance(doc, str):
        return None
    return ElementMeta(id=ELEMENT_ID, tag=tag, hash=hash, doc=doc)


__all__ = [
    "ElementMeta",
    "IDENTITY_FIELDS",
    "get_element_meta",
    "has_identity",
    "init_element",
    "readonly_delattr",
    "readonly_setattr",
]
