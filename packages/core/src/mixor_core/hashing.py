"""Structural fingerprints for validator elements.

A fingerprint is a SHA-256 digest over a kind label and the canonical plain
form of some content. Elements (values, schemas, rules, specifications)
embedded in the content contribute their own stored fingerprint, so a
composite's identity is derived from the identities of its parts.

Fingerprints depend only on structure: identical content yields the
identical fingerprint in every process, which allows an element's stored
hash to be recomputed later and compared (see ``is_schema``/``is_spec``).
State captured by functions counts only where it cannot change, so a
validator keeps its fingerprint while it is being used.
"""

from __future__ import annotations

import hashlib
from typing import Any

from mixor_common.serialization import canonical_json, to_plain

ELEMENT_ID = "Element"


def _element_reference(obj: Any) -> Any:
    if isinstance(obj, type):
        return NotImplemented
    if getattr(obj, "_id", None) != ELEMENT_ID:
        return NotImplemented
    tag = getattr(obj, "_tag", None)
    stored = getattr(obj, "_hash", None)
    if not isinstance(tag, str) or not isinstance(stored, str):
        return NotImplemented
    return {"element": tag, "hash": stored}


def canonical_content(content: Any) -> str:
    """Return the canonical JSON text used as fingerprint input."""
    return canonical_json(to_plain(content, hook=_element_reference))


def fingerprint(kind: str, content: Any) -> str:
    """Compute the structural fingerprint of ``content`` under ``kind``.

    Args:
        kind: Label of the element kind (e.g. ``"schema"``); the same
            content under different kinds yields different fingerprints
        content: Structural content (mappings, sequences, functions,
            elements, plain values)

    Returns:
        Hex digest string

    Raises:
        SerializationError: If an object in the content fails its ``to_dict``

    Example:
        >>> fingerprint("value", {"min": 1}) == fingerprint("value", {"min": 1})
        True
        >>> fingerprint("value", {"min": 1}) == fingerprint("schema", {"min": 1})
        False
    """
    combined = f"{kind}:{canonical_content(content)}"
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()


__all__ = ["ELEMENT_ID", "canonical_content", "fingerprint"]
