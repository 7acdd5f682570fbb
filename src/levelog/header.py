"""Fixed-width record header.

Layout (downstream parsers depend on it byte for byte)::

    Lmmdd hh:mm:ss.uuuuuu ppppppp file:line] msg

L is the severity letter, ppppppp the pid right-aligned to width 7.
"""
from __future__ import annotations

from datetime import datetime

from .severity import Severity

_PREFIX = b"%c%02d%02d %02d:%02d:%02d.%06d %7d "


def basename(path: str) -> str:
    # Strip both separators so Windows paths shorten on POSIX hosts too.
    return path.rsplit("/", 1)[-1].rsplit("\\", 1)[-1]


def format_header(
    buf: bytearray,
    severity: Severity,
    when: datetime,
    pid: int,
    file: str,
    line: int,
) -> bytearray:
    """Append the header for one record to ``buf`` and return it."""
    buf += _PREFIX % (
        ord(severity.letter),
        when.month,
        when.day,
        when.hour,
        when.minute,
        when.second,
        when.microsecond,
        pid,
    )
    buf += basename(file).encode("utf-8", "backslashreplace")
    buf += b":%d] " % line
    return buf


__all__ = ["format_header", "basename"]
