"""Conversion of property value trees into plain JSON-ready values."""

from collections.abc import Callable
from typing import Any

from logs_formatter.formatting.events import (
    DictionaryValue,
    LogEventPropertyValue,
    ScalarValue,
    SequenceValue,
    StructureValue,
)

KeyTransform = Callable[[str], str]


def identity(name: str) -> str:
    return name


def to_snake_case(name: str) -> str:
    """Lower-case every upper-case character, prefixing ``_`` unless it starts the name.

    Works per character, so ``"RequestId"`` becomes ``"request_id"`` and ``"ID"``
    becomes ``"i_d"``.
    """
    chars: list[str] = []
    for index, char in enumerate(name):
        if char.isupper():
            if index > 0:
                chars.append("_")
            chars.append(char.lower())
        else:
            chars.append(char)
    return "".join(chars)


def _map_key(key: LogEventPropertyValue) -> str:
    simplified = simplify(key)
    if simplified is None:
        return ""
    return str(simplified)


def _fallback_text(value: object) -> str:
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def simplify(value: LogEventPropertyValue, key_transform: KeyTransform = identity) -> Any:
    """Project a property value onto primitives, lists and string-keyed dicts.

    Args:
        value: Property value to convert.
        key_transform: Applied to structure member names at every depth. Map keys
            are never transformed.

    Returns:
        A value ``json.dumps`` can encode, apart from scalars holding
        non-JSON types, which are passed through untouched.
    """
    if isinstance(value, ScalarValue):
        return value.value
    if isinstance(value, SequenceValue):
        return [simplify(element, key_transform) for element in value.elements]
    if isinstance(value, StructureValue):
        return {
            key_transform(prop.name): simplify(prop.value, key_transform)
            for prop in value.properties
        }
    if isinstance(value, DictionaryValue):
        return {_map_key(key): simplify(item, key_transform) for key, item in value.elements}
    return _fallback_text(value)


__all__ = ["KeyTransform", "identity", "simplify", "to_snake_case"]
