"""Serialization protocols and plain-data conversion for mixor packages.

This module provides the standard interface for objects that can describe
themselves as dictionaries, plus ``to_plain``, which reduces arbitrary
Python content (containers, functions, dataclasses, serializable objects)
to a deterministic structure of JSON-compatible values.

``to_plain`` is the foundation of structural fingerprinting: two pieces of
content that are structurally identical must reduce to identical plain data,
in every process, so nothing derived from memory addresses or hash
randomization may leak into the output.

Example:
    ```python
    import json
    from mixor_common.serialization import to_plain

    plain = to_plain({"min": 1, "check": lambda v: v > 1})
    json.dumps(plain)  # stable across runs
    ```
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import json
import re
import types
from collections.abc import Callable, Mapping
from typing import Any, Dict, Protocol, runtime_checkable

from mixor_common.exceptions import SerializationError

_EMPTY_CELL = "<empty>"


@runtime_checkable
class Serializable(Protocol):
    """Protocol for objects that can be serialized to a dict.

    The @runtime_checkable decorator allows isinstance() checks at runtime.

    Example:
        ```python
        class Limit:
            def __init__(self, value: int):
                self.value = value

            def to_dict(self) -> dict:
                return {"value": self.value}

        isinstance(Limit(3), Serializable)
        # True
        ```
    """

    def to_dict(self) -> Dict[str, Any]:
        """Convert object to dictionary representation.

        Returns:
            Dictionary with serialized data

        Raises:
            SerializationError: If serialization fails
        """
        ...


def serialize(obj: Any) -> Dict[str, Any]:
    """Serialize an object to dictionary.

    Convenience function that calls to_dict() with error handling.

    Args:
        obj: Object to serialize (must have to_dict method)

    Returns:
        Serialized dictionary

    Raises:
        SerializationError: If object doesn't support serialization or serialization fails
    """
    if not hasattr(obj, "to_dict"):
        raise SerializationError(
            f"Object of type {type(obj).__name__} is not serializable (missing to_dict method)",
            context={"type": type(obj).__name__},
        )

    try:
        result = obj.to_dict()
        if not isinstance(result, dict):
            raise SerializationError(
                f"to_dict() must return a dict, got {type(result).__name__}",
                context={"type": type(obj).__name__, "result_type": type(result).__name__},
            )
        return result
    except Exception as e:
        if isinstance(e, SerializationError):
            raise
        raise SerializationError(
            f"Failed to serialize {type(obj).__name__}: {e}",
            context={"type": type(obj).__name__, "error": str(e)},
        ) from e


def is_serializable(obj: Any) -> bool:
    """Check if an object is serializable.

    Args:
        obj: Object to check

    Returns:
        True if object has a to_dict method
    """
    return isinstance(obj, Serializable) or hasattr(obj, "to_dict")


def qualified_name(obj: Any) -> str:
    """Return ``module.qualname`` for a class, function or other named object."""
    module = getattr(obj, "__module__", None) or "builtins"
    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
    if name is None:
        name = type(obj).__qualname__
    return f"{module}.{name}"


def canonical_json(plain: Any) -> str:
    """Render plain data as compact JSON with a fixed layout."""
    return json.dumps(plain, separators=(",", ":"), ensure_ascii=False)


def to_plain(
    obj: Any,
    hook: Callable[[Any], Any] | None = None,
) -> Any:
    """Reduce content to deterministic, JSON-compatible plain data.

    Mappings keep their insertion order, since the order of entries can be
    meaningful (e.g. evaluation order of fields). Sets are sorted by the
    canonical JSON of their members. Functions reduce to their qualified
    name, bytecode, constants and the state they capture (defaults,
    closure values), so two identically written functions reduce to the
    same structure.

    Captured state only contributes what cannot change after the function
    was created: immutable values, functions, classes and regex patterns
    in full, mutable containers and other objects by their type alone.
    The same holds for the attributes of callable objects. A validator
    therefore reduces to the same data before and after it is used, even
    when it memoizes results or closes over a logger or an object graph.

    Args:
        obj: Content to convert
        hook: Optional callable consulted before the built-in rules. It
            returns ``NotImplemented`` to decline an object, or the plain
            representation to use for it.

    Returns:
        Plain data made of dicts, lists, strings, numbers, booleans and None.
        A container reached again while it is being converted reduces to a
        ``{"cycle": <type>}`` marker.

    Raises:
        SerializationError: If an object's ``to_dict`` fails
    """
    return _PlainConverter(hook).convert(obj)


class _PlainConverter:
    """Stateful walker behind ``to_plain`` tracking the active path for cycles."""

    def __init__(self, hook: Callable[[Any], Any] | None) -> None:
        self._hook = hook
        self._active: set[int] = set()

    def convert(self, obj: Any, captured: bool = False) -> Any:
        if self._hook is not None:
            handled = self._hook(obj)
            if handled is not NotImplemented:
                return handled

        if isinstance(obj, enum.Enum):
            return {"enum": qualified_name(type(obj)), "name": obj.name}
        if obj is None or isinstance(obj, (bool, int, float, str)):
            return obj
        if isinstance(obj, complex):
            return {"complex": [obj.real, obj.imag]}
        if isinstance(obj, bytes):
            return {"bytes": obj.hex()}
        if isinstance(obj, type):
            return {"class": qualified_name(obj)}
        if isinstance(obj, types.ModuleType):
            return {"module": obj.__name__}
        if isinstance(obj, types.CodeType):
            return self._code(obj)
        if isinstance(obj, re.Pattern):
            return {"regex": self.convert(obj.pattern), "flags": obj.flags}

        if isinstance(obj, types.FunctionType):
            if id(obj) in self._active:
                return {"recursive": qualified_name(obj)}
            return self._guarded(obj, self._function)

        if isinstance(obj, (types.BuiltinFunctionType, types.BuiltinMethodType)):
            owner = getattr(obj, "__self__", None)
            if owner is None or isinstance(owner, types.ModuleType):
                return {"builtin": qualified_name(obj)}
            return {"builtin": qualified_name(obj), "self": {"class": qualified_name(type(owner))}}

        if id(obj) in self._active:
            return {"cycle": qualified_name(type(obj))}
        return self._guarded(obj, self._captured if captured else self._compound)

    def _guarded(self, obj: Any, convert: Callable[[Any], Any]) -> Any:
        self._active.add(id(obj))
        try:
            return convert(obj)
        finally:
            self._active.discard(id(obj))

    def _compound(self, obj: Any) -> Any:
        if isinstance(obj, Mapping):
            return {"map": [[self.convert(k), self.convert(v)] for k, v in obj.items()]}
        if isinstance(obj, (list, tuple)):
            return [self.convert(item) for item in obj]
        if isinstance(obj, (set, frozenset)):
            members = [self.convert(item) for item in obj]
            return {"set": sorted(members, key=canonical_json)}
        if isinstance(obj, bytearray):
            return {"bytes": bytes(obj).hex()}
        if isinstance(obj, (functools.partial, types.MethodType)):
            return self._captured(obj)
        if is_serializable(obj) and not isinstance(obj, type):
            return {"type": qualified_name(type(obj)), "data": self.convert(serialize(obj))}
        if dataclasses.is_dataclass(obj):
            values = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
            return {"type": qualified_name(type(obj)), "fields": self._members(values)}

        attrs = _instance_attributes(obj)
        if attrs:
            return {"type": qualified_name(type(obj)), "attrs": self._members(attrs)}
        return {"type": qualified_name(type(obj))}

    def _captured(self, obj: Any) -> Any:
        """Reduce state held by a function or callable to its fixed part."""
        if isinstance(obj, tuple):
            return [self.convert(item, captured=True) for item in obj]
        if isinstance(obj, frozenset):
            members = [self.convert(item, captured=True) for item in obj]
            return {"set": sorted(members, key=canonical_json)}
        if isinstance(obj, functools.partial):
            return {
                "partial": self.convert(obj.func, captured=True),
                "args": self.convert(obj.args, captured=True),
                "keywords": self._members(obj.keywords),
            }
        if isinstance(obj, types.MethodType):
            return {
                "method": self.convert(obj.__func__, captured=True),
                "self": {"type": qualified_name(type(obj.__self__))},
            }
        return {"type": qualified_name(type(obj))}

    def _members(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {"map": [[name, self.convert(value, captured=True)] for name, value in values.items()]}

    def _function(self, fn: types.FunctionType) -> Dict[str, Any]:
        closure = []
        for cell in fn.__closure__ or ():
            try:
                closure.append(self.convert(cell.cell_contents, captured=True))
            except ValueError:
                closure.append(_EMPTY_CELL)
        return {
            "function": qualified_name(fn),
            "code": self._code(fn.__code__),
            "defaults": self.convert(fn.__defaults__, captured=True),
            "kwdefaults": self._members(fn.__kwdefaults__) if fn.__kwdefaults__ else None,
            "closure": closure,
        }

    def _code(self, code: types.CodeType) -> Dict[str, Any]:
        return {
            "bytecode": code.co_code.hex(),
            "consts": [self.convert(const, captured=True) for const in code.co_consts],
            "names": list(code.co_names),
        }


def _instance_attributes(obj: Any) -> Dict[str, Any]:
    """Collect instance state from ``__dict__`` and ``__slots__``."""
    attrs: Dict[str, Any] = dict(getattr(obj, "__dict__", {}) or {})
    for klass in type(obj).__mro__:
        slots = getattr(klass, "__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__") or slot in attrs:
                continue
            if hasattr(obj, slot):
                attrs[slot] = getattr(obj, slot)
    return attrs


__all__ = [
    "Serializable",
    "serialize",
    "is_serializable",
    "qualified_name",
    "canonical_json",
    "to_plain",
]
