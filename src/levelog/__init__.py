"""Leveled logging in the glog style.

Records look like ``I0102 15:04:05.067890    1234 main.py:42] message`` and
go to a single configurable sink (stderr by default)::

    import levelog

    levelog.info("listening on", port)
    levelog.configure(levelog.Options(output="/var/log/app.log"))
    levelog.copy_standard_log_to("WARNING")

The version is read from importlib.metadata so that an editable install or
wheel always reports the version declared in pyproject.toml, with a
hardcoded fallback for direct source usage without installation.
"""

from __future__ import annotations

from importlib import metadata as _metadata

from .config import Options, ProcessState
from .engine import (
    Logger,
    configure,
    default_logger,
    error,
    error_depth,
    errorf,
    exit,
    exit_depth,
    exitf,
    fatal,
    fatal_depth,
    fatalf,
    flush,
    info,
    info_depth,
    infof,
    reset,
    warning,
    warning_depth,
    warningf,
)
from .errors import ConfigError, UnknownSeverityError
from .severity import Severity
from .stdlog import LogBridge, StandardLogHandler, copy_standard_log_to, detach_standard_log

__all__ = [
    "__version__",
    "ConfigError",
    "LogBridge",
    "Logger",
    "Options",
    "ProcessState",
    "Severity",
    "StandardLogHandler",
    "UnknownSeverityError",
    "configure",
    "copy_standard_log_to",
    "default_logger",
    "detach_standard_log",
    "error",
    "error_depth",
    "errorf",
    "exit",
    "exit_depth",
    "exitf",
    "fatal",
    "fatal_depth",
    "fatalf",
    "flush",
    "info",
    "info_depth",
    "infof",
    "reset",
    "warning",
    "warning_depth",
    "warningf",
]

_FALLBACK_VERSION = "0.1.0"  # MUST match pyproject.toml [project].version

try:  # pragma: no cover - success path covered indirectly via CLI test
	__version__ = _metadata.version("levelog")  # type: ignore[assignment]
except Exception:  # pragma: no cover - fallback exercised if metadata missing
	__version__ = _FALLBACK_VERSION
