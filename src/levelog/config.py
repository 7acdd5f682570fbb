from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional, Union

from .errors import ConfigError
from .severity import Severity
from .sinks import FileSink, Sink, StderrSink, as_sink


def _hard_exit(status: int) -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except Exception:  # noqa: BLE001 - exiting regardless
            pass
    os._exit(status)


@dataclass
class Options:
    """Changes to apply with ``configure``; ``None`` leaves a field untouched."""

    # New sink: a Sink, any object with write(), or a path opened for append
    output: Any = None
    # Timestamp source returning local time (tests pin it to a fixed instant)
    clock: Optional[Callable[[], datetime]] = None
    # Override of the pid snapshot taken at startup
    pid: Optional[int] = None
    # Records below this severity are discarded
    threshold: Optional[Union[Severity, str]] = None
    # Called with the exit status after FATAL / exit records are written
    exit_func: Optional[Callable[[int], None]] = None


@dataclass
class ProcessState:
    """Process-wide logging state owned by a ``Logger``."""

    sink: Sink = field(default_factory=StderrSink)
    pid: int = field(default_factory=os.getpid)
    clock: Callable[[], datetime] = datetime.now
    threshold: Severity = Severity.INFO
    exit_func: Callable[[int], None] = _hard_exit

    def apply(self, options: Options) -> None:
        """Validate every field of ``options`` first, then apply them together."""
        changes = {}
        if options.clock is not None:
            if not callable(options.clock):
                raise ConfigError("clock must be a zero-argument callable returning a datetime")
            changes["clock"] = options.clock
        if options.pid is not None:
            if isinstance(options.pid, bool) or not isinstance(options.pid, int) or options.pid < 0:
                raise ConfigError(f"pid must be a non-negative integer, got {options.pid!r}")
            changes["pid"] = options.pid
        if options.threshold is not None:
            changes["threshold"] = Severity.parse(options.threshold)
        if options.exit_func is not None:
            if not callable(options.exit_func):
                raise ConfigError("exit_func must be callable")
            changes["exit_func"] = options.exit_func
        # Last, so a file is only opened once everything else validated.
        if options.output is not None:
            changes["sink"] = as_sink(options.output)
        if "sink" in changes:
            self._retire(changes["sink"])
        for name, value in changes.items():
            setattr(self, name, value)

    def reset(self) -> None:
        fresh = ProcessState()
        self._retire(fresh.sink)
        self.sink = fresh.sink
        self.pid = fresh.pid
        self.clock = fresh.clock
        self.threshold = fresh.threshold
        self.exit_func = fresh.exit_func

    def _retire(self, replacement: Sink) -> None:
        # Files opened from a path belong to us; caller-supplied streams do not.
        if isinstance(self.sink, FileSink) and self.sink is not replacement:
            self.sink.close()


__all__ = ["Options", "ProcessState"]
