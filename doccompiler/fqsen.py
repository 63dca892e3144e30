"""Fully qualified structural element names (FQSEN)."""

from __future__ import annotations

import re
from typing import List, Tuple

from .errors import InvalidFqsenError

SEPARATOR = "\\"
ROOT = SEPARATOR

_IDENTIFIER = r"[A-Za-z_\x80-\uffff][A-Za-z0-9_\x80-\uffff]*"
_PATTERN = re.compile(
    rf"^\\(?:{_IDENTIFIER}(?:\\{_IDENTIFIER})*)?"
    rf"(?:::\$?{_IDENTIFIER}(?:\(\))?)?$"
)


class Fqsen:
    """Validated FQSEN such as ``\\App\\Models\\User`` or ``\\App\\User::save()``."""

    __slots__ = ("_value", "_name")

    def __init__(self, value: str) -> None:
        if not _PATTERN.match(value):
            raise InvalidFqsenError(f'"{value}" is not a valid Fqsen.')
        self._value = value
        self._name = local_name(value)

    @property
    def name(self) -> str:
        """The trailing segment; empty for the root."""
        return self._name

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Fqsen({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fqsen):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


def split_path(path: str) -> Tuple[str, str]:
    """Split a path at its last separator into ``(parent_path, name)``.

    Does not validate; a path without any separator yields an empty parent.
    """
    if path in ("", ROOT):
        return "", ""
    head, sep, tail = path.rpartition(SEPARATOR)
    if not sep:
        return "", path
    return head or ROOT, tail


def segments(path: str) -> List[str]:
    """Return the non-root segments of a path, ``[]`` for the root."""
    stripped = path.strip(SEPARATOR)
    return stripped.split(SEPARATOR) if stripped else []


def local_name(value: str) -> str:
    """Return the trailing name of an FQSEN without validating it."""
    if "::" in value:
        member = value.rsplit("::", 1)[1]
        return member.lstrip("$").removesuffix("()")
    return value.rsplit(SEPARATOR, 1)[-1]


__all__ = ["Fqsen", "ROOT", "SEPARATOR", "local_name", "segments", "split_path"]
