"""Exceptions raised while configuring levelog.

Logging calls themselves never raise; everything here is reported at
configuration time.
"""
from __future__ import annotations


class ConfigError(ValueError):
    """Invalid configuration value or option combination."""


class UnknownSeverityError(ConfigError):
    """A severity name that is not one of INFO, WARNING, ERROR, FATAL."""


__all__ = ["ConfigError", "UnknownSeverityError"]
