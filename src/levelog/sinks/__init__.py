"""Output sink abstractions.

The engine hands every sink complete, newline-terminated records as bytes in
a single ``write`` call. Wrappers here adapt ordinary streams and paths to
that interface.
"""
from __future__ import annotations

import os
import sys
from typing import Any, List, Protocol, Union

from ..errors import ConfigError
from ..logutil import get_logger


class Sink(Protocol):  # pragma: no cover - simple protocol
    def write(self, data: bytes) -> None: ...  # noqa: D401,E701 - protocol stub
    def flush(self) -> None: ...


class StreamSink:
    """Adapt a file-like object; text streams receive decoded ``str``."""

    def __init__(self, stream: Any) -> None:
        if not callable(getattr(stream, "write", None)):
            raise ConfigError(f"output {stream!r} has no write() method")
        self.stream = stream
        # TextIOWrapper, StringIO and pytest's capture streams all carry an
        # encoding attribute; byte streams do not.
        self.text = hasattr(stream, "encoding")

    def write(self, data: bytes) -> None:
        if self.text:
            # Records are always UTF-8; the stream applies its own encoding.
            self.stream.write(data.decode("utf-8", "replace"))
        else:
            self.stream.write(data)

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()


class StderrSink:
    """Write to whatever ``sys.stderr`` is at the time of the write."""

    def write(self, data: bytes) -> None:
        StreamSink(sys.stderr).write(data)

    def flush(self) -> None:
        sys.stderr.flush()


class FileSink:
    def __init__(self, path: Union[str, "os.PathLike[str]"]) -> None:
        self.path = os.fspath(path)
        try:
            self._fh = open(self.path, "ab")
        except OSError as exc:
            raise ConfigError(f"cannot open log file '{self.path}': {exc}") from exc

    def write(self, data: bytes) -> None:
        self._fh.write(data)

    def flush(self) -> None:
        self._fh.flush()

    def close(self) -> None:
        self._fh.close()


class MultiSink:
    """Tee records to several sinks; one failing sink does not stop the others."""

    def __init__(self, sinks: List[Any]):
        self._sinks = [as_sink(s) for s in sinks]
        # Member writes that failed; the engine only sees failures of the tee itself.
        self.errors = 0

    def write(self, data: bytes) -> None:
        for s in self._sinks:
            try:
                s.write(data)
            except Exception as exc:  # noqa: BLE001
                # Best-effort; individual sink failure should not cascade.
                self.errors += 1
                get_logger().debug("tee member %s write failed: %s", type(s).__name__, exc)

    def flush(self) -> None:
        for s in self._sinks:
            try:
                s.flush()
            except Exception as exc:  # noqa: BLE001
                get_logger().debug("tee member %s flush failed: %s", type(s).__name__, exc)


_SINK_TYPES = (StreamSink, StderrSink, FileSink, MultiSink)


def as_sink(output: Any) -> Sink:
    """Wrap ``output`` (sink, stream, or filesystem path) as a ``Sink``."""
    if isinstance(output, _SINK_TYPES):
        return output
    if isinstance(output, (str, os.PathLike)):
        return FileSink(output)
    return StreamSink(output)


__all__ = ["Sink", "StreamSink", "StderrSink", "FileSink", "MultiSink", "as_sink"]
