from __future__ import annotations

from enum import IntEnum
from typing import Dict, Union

from .errors import UnknownSeverityError


class Severity(IntEnum):
    """Ordered log severity; higher values are more severe."""

    INFO = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3

    @property
    def letter(self) -> str:
        return _LETTERS[self]

    @classmethod
    def parse(cls, value: Union["Severity", str]) -> "Severity":
        """Return the member for ``value`` (a member or a case-insensitive name)."""
        if isinstance(value, Severity):
            return value
        if isinstance(value, str):
            member = _BY_NAME.get(value.strip().upper())
            if member is not None:
                return member
        names = ", ".join(s.name for s in cls)
        raise UnknownSeverityError(f"unknown severity {value!r}; expected one of {names}")

    @classmethod
    def from_letter(cls, letter: str) -> "Severity":
        return _BY_LETTER[letter]


_LETTERS: Dict[Severity, str] = {s: s.name[0] for s in Severity}
_BY_NAME: Dict[str, Severity] = {s.name: s for s in Severity}
_BY_LETTER: Dict[str, Severity] = {s.name[0]: s for s in Severity}

__all__ = ["Severity"]
