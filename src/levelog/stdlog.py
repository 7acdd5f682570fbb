"""Route Python's standard ``logging`` output into the leveled stream.

For code that cannot be changed to call levelog directly::

    levelog.copy_standard_log_to("INFO")
    logging.getLogger("legacy").warning("disk almost full")

produces ``I.... legacy_module.py:12] disk almost full``. The standard
package's own level filtering still applies; every record that reaches the
handler is written at the one configured severity.
"""
from __future__ import annotations

import io
import logging
import re
import threading
from typing import Optional, Union

from .caller import UNKNOWN_FILE, UNKNOWN_LINE
from .engine import Logger, default_logger
from .logutil import LOGGER_NAME
from .severity import Severity

_guard = threading.local()


class StandardLogHandler(logging.Handler):
    """``logging.Handler`` that re-emits each record at a fixed severity."""

    def __init__(
        self,
        severity: Union[Severity, str],
        target: Optional[Logger] = None,
        level: int = logging.NOTSET,
    ) -> None:
        # Parse before touching logging state so a bad name fails here.
        self.severity = Severity.parse(severity)
        super().__init__(level)
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        # Our own diagnostics would loop straight back into a failing sink.
        if record.name == LOGGER_NAME or record.name.startswith(LOGGER_NAME + "."):
            return
        if getattr(_guard, "active", False):
            return
        _guard.active = True
        try:
            message = record.getMessage()
            if record.exc_info:
                message = message + "\n" + self._exception_text(record)
            elif record.stack_info:
                message = message + "\n" + record.stack_info
            # emit_at drops records raised from inside one of our own sink writes.
            target = self.target if self.target is not None else default_logger()
            target.emit_at(self.severity, record.pathname, record.lineno, message)
        except Exception:  # noqa: BLE001
            self.handleError(record)
        finally:
            _guard.active = False

    def _exception_text(self, record: logging.LogRecord) -> str:
        if not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        return record.exc_text


def copy_standard_log_to(
    severity: Union[Severity, str],
    logger: Optional[logging.Logger] = None,
    target: Optional[Logger] = None,
) -> StandardLogHandler:
    """Install a ``StandardLogHandler`` on ``logger`` (root by default).

    Replaces a handler installed by an earlier call. Unknown severity names
    raise ``UnknownSeverityError`` immediately.
    """
    handler = StandardLogHandler(severity, target=target)
    logger = logger if logger is not None else logging.getLogger()
    detach_standard_log(logger)
    logger.addHandler(handler)
    return handler


def detach_standard_log(logger: Optional[logging.Logger] = None) -> None:
    logger = logger if logger is not None else logging.getLogger()
    for existing in list(logger.handlers):
        if isinstance(existing, StandardLogHandler):
            logger.removeHandler(existing)


# "path/to/file.py:NN: message" at the start of the line, optionally after the
# timestamp shapes written by logging.Formatter (asctime, "2026-10-17 21:44:00,123")
# and Go-style log flags ("2009/01/23 01:23:23.123123"); the rest is left alone.
_TIMESTAMP = r"(?:\d{4}[-/]\d{2}[-/]\d{2}[ T])?\d{2}:\d{2}:\d{2}(?:[.,]\d+)?|\d{4}[-/]\d{2}[-/]\d{2}"
_CALL_SITE = re.compile(
    r"^(?:(?:" + _TIMESTAMP + r") )?(?P<file>[^\s:]+\.py):(?P<line>\d+): ?(?P<msg>.*)$", re.DOTALL
)


class LogBridge(io.TextIOBase):
    """Writable text stream that turns each complete line into a record.

    A leading ``file.py:NN:`` call site is stripped and used for attribution;
    lines without one are attributed to ``???:0``. Partial lines are held
    until their newline arrives or ``flush``/``close`` is called.
    """

    def __init__(self, severity: Union[Severity, str], target: Optional[Logger] = None) -> None:
        super().__init__()
        self.severity = Severity.parse(severity)
        self.target = target
        self._pending = ""
        self._lock = threading.Lock()

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        with self._lock:
            self._pending += text
            *lines, self._pending = self._pending.split("\n")
        for line in lines:
            self._emit_line(line)
        return len(text)

    def flush(self) -> None:
        with self._lock:
            rest, self._pending = self._pending, ""
        if rest:
            self._emit_line(rest)

    def close(self) -> None:
        if not self.closed:
            self.flush()
        super().close()

    def _emit_line(self, line: str) -> None:
        match = _CALL_SITE.match(line)
        if match:
            file, lineno, message = match.group("file"), int(match.group("line")), match.group("msg")
        else:
            file, lineno, message = UNKNOWN_FILE, UNKNOWN_LINE, line
        target = self.target if self.target is not None else default_logger()
        target.emit_at(self.severity, file, lineno, message)


__all__ = ["StandardLogHandler", "LogBridge", "copy_standard_log_to", "detach_standard_log"]
