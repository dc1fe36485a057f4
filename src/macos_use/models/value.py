"""
Loosely-typed argument values.

Tool-call arguments arrive as decoded JSON. Before any extraction they are
converted into `Value`, a closed tagged variant, so extractors branch on an
explicit tag instead of on whatever Python type the decoder produced.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .enums import ValueKind

ArgumentsMap = Mapping[str, "Value"]


@dataclass(frozen=True)
class Value:
    """
    Immutable tagged value: null, bool, int, double, string, array or object.

    Arrays are stored as tuples and objects as key-sorted tuples of pairs, so
    two values are equal exactly when they are structurally equal.

    Example:
        value = Value.from_json({"pid": 501, "flags": ["cmd"]})
        value.object_value["pid"].int_value  # 501
    """

    kind: ValueKind
    payload: Any = None

    # -- constructors ------------------------------------------------------

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL)

    @classmethod
    def of_bool(cls, value: bool) -> "Value":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def of_int(cls, value: int) -> "Value":
        return cls(ValueKind.INT, int(value))

    @classmethod
    def of_double(cls, value: float) -> "Value":
        return cls(ValueKind.DOUBLE, float(value))

    @classmethod
    def of_string(cls, value: str) -> "Value":
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def of_array(cls, items: list["Value"] | tuple["Value", ...]) -> "Value":
        return cls(ValueKind.ARRAY, tuple(items))

    @classmethod
    def of_object(cls, entries: Mapping[str, "Value"]) -> "Value":
        return cls(ValueKind.OBJECT, tuple(sorted(entries.items(), key=lambda kv: kv[0])))

    @classmethod
    def from_json(cls, obj: Any) -> "Value":
        """
        Convert decoded JSON into a Value.

        Args:
            obj: None, bool, int, float, str, list/tuple or dict with str keys

        Returns:
            Equivalent Value

        Raises:
            TypeError: If obj (or anything nested in it) is not JSON data
        """
        # bool is a subclass of int, so it must be tested first
        if obj is None:
            return cls.null()
        if isinstance(obj, bool):
            return cls.of_bool(obj)
        if isinstance(obj, int):
            return cls.of_int(obj)
        if isinstance(obj, float):
            return cls.of_double(obj)
        if isinstance(obj, str):
            return cls.of_string(obj)
        if isinstance(obj, (list, tuple)):
            return cls.of_array([cls.from_json(item) for item in obj])
        if isinstance(obj, dict):
            entries = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise TypeError(f"Object keys must be strings, got {type(key).__name__}")
                entries[key] = cls.from_json(item)
            return cls.of_object(entries)
        raise TypeError(f"Cannot convert {type(obj).__name__} to Value")

    # -- accessors ---------------------------------------------------------

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    @property
    def bool_value(self) -> bool | None:
        return self.payload if self.kind is ValueKind.BOOL else None

    @property
    def int_value(self) -> int | None:
        return self.payload if self.kind is ValueKind.INT else None

    @property
    def double_value(self) -> float | None:
        return self.payload if self.kind is ValueKind.DOUBLE else None

    @property
    def string_value(self) -> str | None:
        return self.payload if self.kind is ValueKind.STRING else None

    @property
    def array_value(self) -> tuple["Value", ...] | None:
        return self.payload if self.kind is ValueKind.ARRAY else None

    @property
    def object_value(self) -> dict[str, "Value"] | None:
        return dict(self.payload) if self.kind is ValueKind.OBJECT else None

    def to_json(self) -> Any:
        """Convert back into plain JSON-compatible Python data."""
        if self.kind is ValueKind.ARRAY:
            return [item.to_json() for item in self.payload]
        if self.kind is ValueKind.OBJECT:
            return {key: item.to_json() for key, item in self.payload}
        return self.payload

    def __repr__(self) -> str:
        if self.kind is ValueKind.NULL:
            return "Value.null"
        return f"Value.{self.kind.value}({self.to_json()!r})"


def arguments_from_json(raw: Mapping[str, Any] | None) -> dict[str, Value]:
    """
    Build an arguments map from a raw tool-call arguments dict.

    Args:
        raw: Decoded JSON object, or None when the call carried no arguments

    Returns:
        Mapping of argument name to Value
    """
    if raw is None:
        return {}
    return {str(key): Value.from_json(item) for key, item in raw.items()}
