"""Pool of reusable formatting buffers.

Each emission borrows one ``bytearray`` for the duration of a single write
and hands it back afterwards, so sustained logging does not allocate a fresh
buffer per record.
"""
from __future__ import annotations

import threading
from typing import List


class BufferPool:
    def __init__(self, max_idle: int = 64, max_size: int = 64 * 1024) -> None:
        # Idle buffers kept for reuse; extra releases are dropped.
        self.max_idle = max_idle
        # Buffers that grew past this many bytes are not pooled.
        self.max_size = max_size
        self.allocated = 0
        self.reused = 0
        self._free: List[bytearray] = []
        self._lock = threading.Lock()

    def acquire(self) -> bytearray:
        """Return an empty buffer, reusing a released one when possible."""
        with self._lock:
            if self._free:
                self.reused += 1
                return self._free.pop()
            self.allocated += 1
        return bytearray()

    def release(self, buf: bytearray) -> None:
        oversized = len(buf) > self.max_size
        del buf[:]
        if oversized:
            return
        with self._lock:
            if len(self._free) < self.max_idle:
                self._free.append(buf)

    def idle(self) -> int:
        with self._lock:
            return len(self._free)


__all__ = ["BufferPool"]
