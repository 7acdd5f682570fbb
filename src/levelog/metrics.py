"""Emission counters.

``SeverityStats`` is updated by the engine under its lock; ``emission_metrics``
provides a lightweight, dependency-free snapshot suitable for exposure via
HTTP or logging. Avoids mutating the logger.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict

from .severity import Severity

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .engine import Logger


@dataclass
class SeverityStats:
    lines: Dict[Severity, int] = field(default_factory=lambda: {s: 0 for s in Severity})
    bytes: Dict[Severity, int] = field(default_factory=lambda: {s: 0 for s in Severity})
    write_errors: int = 0
    # Records dropped because a sink logged back into the logger mid-write
    reentrant_drops: int = 0

    def record(self, severity: Severity, nbytes: int) -> None:
        self.lines[severity] += 1
        self.bytes[severity] += nbytes


def emission_metrics(logger: "Logger") -> Dict[str, Any]:
    stats = logger.stats
    state = logger.state
    return {
        "severities": {
            s.name.lower(): {"lines": stats.lines[s], "bytes": stats.bytes[s]} for s in Severity
        },
        "write_errors": stats.write_errors,
        "reentrant_drops": stats.reentrant_drops,
        "buffers": {
            "allocated": logger.pool.allocated,
            "reused": logger.pool.reused,
            "idle": logger.pool.idle(),
        },
        "config": {
            "pid": state.pid,
            "threshold": state.threshold.name,
            "sink": type(state.sink).__name__,
        },
    }

__all__ = ["SeverityStats", "emission_metrics"]
