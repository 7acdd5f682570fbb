"""Emission engine and the process-wide default logger.

Every record is formatted into a pooled buffer and written to the active
sink in a single call while the logger's lock is held, so concurrent records
never interleave and a sink swap through ``configure`` never splits one.

Depth arguments count frames above the caller of the entry point: depth 0
attributes the record to the line that called ``info``/``info_depth``/...,
depth 1 to that function's caller, and so on.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Tuple

from .buffers import BufferPool
from .caller import CallerResolver, FrameCallerResolver, all_stacks
from .config import Options, ProcessState
from .header import format_header
from .logutil import get_logger
from .metrics import SeverityStats, emission_metrics
from .severity import Severity

FATAL_EXIT_STATUS = 255
EXIT_STATUS = 1


def _sprint(args: Tuple[Any, ...]) -> str:
    return " ".join(str(a) for a in args)


def _sprintf(fmt: str, args: Tuple[Any, ...]) -> str:
    if not args:
        return str(fmt)
    try:
        return str(fmt) % args
    except (TypeError, ValueError, KeyError) as exc:
        return f"{fmt} (bad format arguments {args!r}: {exc})"


class Logger:
    def __init__(
        self,
        state: Optional[ProcessState] = None,
        resolver: Optional[CallerResolver] = None,
        pool: Optional[BufferPool] = None,
    ) -> None:
        self.state = state if state is not None else ProcessState()
        self.resolver = resolver if resolver is not None else FrameCallerResolver()
        self.pool = pool if pool is not None else BufferPool()
        self.stats = SeverityStats()
        self._lock = threading.Lock()
        # Per-thread marker for "inside the locked write section".
        self._local = threading.local()

    def configure(self, options: Options) -> None:
        with self._lock:
            self.state.apply(options)

    def reset(self) -> None:
        """Restore process-start state and clear the counters."""
        with self._lock:
            self.state.reset()
            self.stats = SeverityStats()

    def metrics(self) -> Dict[str, Any]:
        with self._lock:
            return emission_metrics(self)

    def flush(self) -> None:
        if self.is_emitting():
            return
        with self._held():
            self._flush_sink()

    def is_emitting(self) -> bool:
        """True while the calling thread is writing a record through this logger.

        A sink that logs back into the same logger from inside its write
        would otherwise wait on a lock its own thread holds.
        """
        return getattr(self._local, "active", False)

    @contextmanager
    def _held(self) -> Iterator[None]:
        with self._lock:
            self._local.active = True
            try:
                yield
            finally:
                self._local.active = False

    def _reentered(self) -> bool:
        if not self.is_emitting():
            return False
        # This thread holds the lock, so the counter is safe to touch.
        self.stats.reentrant_drops += 1
        return True

    # -- core ---------------------------------------------------------------

    def emit(self, severity: Severity, depth: int, message: str) -> None:
        """Write ``message`` attributed to the frame ``depth`` levels above our caller."""
        file, line = self.resolver.resolve(depth)
        self.emit_at(severity, file, line, message)

    def emit_at(self, severity: Severity, file: str, line: int, message: str) -> None:
        """Write ``message`` attributed to an explicit call site.

        A FATAL record is followed by a dump of all thread stacks and the
        termination of the process with status 255.
        """
        severity = Severity(severity)
        if self._reentered():
            return
        self._write_record(severity, file, line, message)
        if severity is Severity.FATAL:
            self._terminate(FATAL_EXIT_STATUS, dump_stacks=True)

    def _write_record(self, severity: Severity, file: str, line: int, message: str) -> None:
        with self._held():
            state = self.state
            if severity < state.threshold:
                return
            buf = self.pool.acquire()
            try:
                format_header(buf, severity, state.clock(), state.pid, file, line)
                buf += message.encode("utf-8", "backslashreplace")
                if not message.endswith("\n"):
                    buf += b"\n"
                if self._write(bytes(buf)):
                    self.stats.record(severity, len(buf))
            finally:
                self.pool.release(buf)

    def _write(self, data: bytes) -> bool:
        try:
            self.state.sink.write(data)
        except Exception as exc:  # noqa: BLE001 - logging must not break the caller
            self.stats.write_errors += 1
            log = get_logger()
            if self.stats.write_errors == 1:
                log.warning("log sink write failed (further failures are logged at debug): %s", exc)
            else:
                log.debug("log sink write failed: %s", exc)
            return False
        return True

    def _flush_sink(self) -> None:
        try:
            self.state.sink.flush()
        except Exception as exc:  # noqa: BLE001
            get_logger().debug("log sink flush failed: %s", exc)

    def _terminate(self, status: int, dump_stacks: bool) -> None:
        with self._held():
            if dump_stacks:
                self._write(all_stacks().encode("utf-8", "backslashreplace"))
            self._flush_sink()
            exit_func = self.state.exit_func
        exit_func(status)

    # -- entry points -------------------------------------------------------

    def print_depth(self, severity: Severity, depth: int, *args: Any) -> None:
        self.emit(severity, depth + 1, _sprint(args))

    def printf_depth(self, severity: Severity, depth: int, fmt: str, *args: Any) -> None:
        self.emit(severity, depth + 1, _sprintf(fmt, args))

    def info(self, *args: Any) -> None:
        self.print_depth(Severity.INFO, 1, *args)

    def infof(self, fmt: str, *args: Any) -> None:
        self.printf_depth(Severity.INFO, 1, fmt, *args)

    def info_depth(self, depth: int, *args: Any) -> None:
        self.print_depth(Severity.INFO, depth + 1, *args)

    def warning(self, *args: Any) -> None:
        self.print_depth(Severity.WARNING, 1, *args)

    def warningf(self, fmt: str, *args: Any) -> None:
        self.printf_depth(Severity.WARNING, 1, fmt, *args)

    def warning_depth(self, depth: int, *args: Any) -> None:
        self.print_depth(Severity.WARNING, depth + 1, *args)

    def error(self, *args: Any) -> None:
        self.print_depth(Severity.ERROR, 1, *args)

    def errorf(self, fmt: str, *args: Any) -> None:
        self.printf_depth(Severity.ERROR, 1, fmt, *args)

    def error_depth(self, depth: int, *args: Any) -> None:
        self.print_depth(Severity.ERROR, depth + 1, *args)

    def fatal(self, *args: Any) -> None:
        self.print_depth(Severity.FATAL, 1, *args)

    def fatalf(self, fmt: str, *args: Any) -> None:
        self.printf_depth(Severity.FATAL, 1, fmt, *args)

    def fatal_depth(self, depth: int, *args: Any) -> None:
        self.print_depth(Severity.FATAL, depth + 1, *args)

    def exit_depth(self, depth: int, *args: Any) -> None:
        """Write a FATAL record, flush, and exit with status 1 (no stack dump)."""
        if self._reentered():
            return
        file, line = self.resolver.resolve(depth)
        self._write_record(Severity.FATAL, file, line, _sprint(args))
        self._terminate(EXIT_STATUS, dump_stacks=False)

    def exit(self, *args: Any) -> None:
        self.exit_depth(1, *args)

    def exitf(self, fmt: str, *args: Any) -> None:
        self.exit_depth(1, _sprintf(fmt, args))


_default = Logger()


def default_logger() -> Logger:
    """The process-lifetime logger behind the module-level functions."""
    return _default


def configure(options: Options) -> None:
    _default.configure(options)


def reset() -> None:
    _default.reset()


def flush() -> None:
    _default.flush()


def info(*args: Any) -> None:
    _default.info_depth(1, *args)


def infof(fmt: str, *args: Any) -> None:
    _default.printf_depth(Severity.INFO, 1, fmt, *args)


def info_depth(depth: int, *args: Any) -> None:
    _default.info_depth(depth + 1, *args)


def warning(*args: Any) -> None:
    _default.warning_depth(1, *args)


def warningf(fmt: str, *args: Any) -> None:
    _default.printf_depth(Severity.WARNING, 1, fmt, *args)


def warning_depth(depth: int, *args: Any) -> None:
    _default.warning_depth(depth + 1, *args)


def error(*args: Any) -> None:
    _default.error_depth(1, *args)


def errorf(fmt: str, *args: Any) -> None:
    _default.printf_depth(Severity.ERROR, 1, fmt, *args)


def error_depth(depth: int, *args: Any) -> None:
    _default.error_depth(depth + 1, *args)


def fatal(*args: Any) -> None:
    _default.fatal_depth(1, *args)


def fatalf(fmt: str, *args: Any) -> None:
    _default.printf_depth(Severity.FATAL, 1, fmt, *args)


def fatal_depth(depth: int, *args: Any) -> None:
    _default.fatal_depth(depth + 1, *args)


def exit(*args: Any) -> None:  # noqa: A001 - mirrors the other severities
    _default.exit_depth(1, *args)


def exitf(fmt: str, *args: Any) -> None:
    _default.exit_depth(1, _sprintf(fmt, args))


def exit_depth(depth: int, *args: Any) -> None:
    _default.exit_depth(depth + 1, *args)


__all__ = [
    "Logger",
    "default_logger",
    "configure",
    "reset",
    "flush",
    "info",
    "infof",
    "info_depth",
    "warning",
    "warningf",
    "warning_depth",
    "error",
    "errorf",
    "error_depth",
    "fatal",
    "fatalf",
    "fatal_depth",
    "exit",
    "exitf",
    "exit_depth",
]
