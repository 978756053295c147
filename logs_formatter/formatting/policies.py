"""Field selection policies: which properties become structured fields, and under what name."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Protocol

from logs_formatter.formatting.simplify import KeyTransform, identity, to_snake_case


class FieldPolicy(Protocol):
    """Decides the output key of each event property.

    ``select`` returns the key to emit the property under in ``fields``, or
    ``None`` to send it to the overflow text appended to the message.
    """

    key_transform: KeyTransform

    def select(self, name: str) -> str | None: ...


class AllowListPolicy:
    """Keep properties whose name is in the allow set, compared case-insensitively."""

    key_transform: KeyTransform = staticmethod(identity)

    def __init__(self, allowed_fields: Iterable[str]) -> None:
        self._allowed = frozenset(name.casefold() for name in allowed_fields)

    @property
    def allowed_fields(self) -> frozenset[str]:
        return self._allowed

    def select(self, name: str) -> str | None:
        return name if name.casefold() in self._allowed else None


class RenameMappingPolicy:
    """Keep properties that are keys of the rename table, emitted under the mapped name.

    Lookup is case-sensitive.
    """

    key_transform: KeyTransform = staticmethod(identity)

    def __init__(self, field_mappings: Mapping[str, str]) -> None:
        self._mappings = MappingProxyType(dict(field_mappings))

    @property
    def field_mappings(self) -> Mapping[str, str]:
        return self._mappings

    def select(self, name: str) -> str | None:
        return self._mappings.get(name)


class SnakeCasePolicy:
    """Keep every property, renaming it and nested structure members to snake_case."""

    key_transform: KeyTransform = staticmethod(to_snake_case)

    def select(self, name: str) -> str | None:
        return to_snake_case(name)


__all__ = ["AllowListPolicy", "FieldPolicy", "RenameMappingPolicy", "SnakeCasePolicy"]
