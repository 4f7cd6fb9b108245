"""Input normalization for public entry points.

Elements, groups and action codes may arrive as strings, enum members or
other scalars; group arguments may also be sequences. Each entry point
normalizes once and then works on plain strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Union


def normalize_name(value: Any) -> str:
    """Coerce an element, group or action identifier to its string form.

    Enum members map to their value when it is a string, otherwise to their
    name; everything else goes through ``str()``.
    """
    if isinstance(value, Enum):
        return value.value if isinstance(value.value, str) else value.name
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class Single:
    """One group name."""

    name: str


@dataclass(frozen=True)
class Many:
    """An ordered sequence of group names."""

    names: tuple[str, ...]


GroupSelector = Union[Single, Many]


def select_groups(value: Any) -> GroupSelector:
    """Normalize a group argument into a Single or Many selector."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return Many(tuple(normalize_name(v) for v in _ordered(value)))
    return Single(normalize_name(value))


def _ordered(values: Iterable[Any]) -> list[Any]:
    if isinstance(values, (set, frozenset)):
        return sorted(values, key=normalize_name)
    return list(values)


__all__ = [
    "GroupSelector",
    "Many",
    "Single",
    "normalize_name",
    "select_groups",
]
