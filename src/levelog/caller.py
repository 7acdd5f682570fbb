"""Call-site attribution for log records."""
from __future__ import annotations

import sys
import threading
import traceback
from typing import Protocol, Tuple

UNKNOWN_FILE = "???"
UNKNOWN_LINE = 0


class CallerResolver(Protocol):  # pragma: no cover - simple protocol
    def resolve(self, depth: int) -> Tuple[str, int]: ...  # noqa: E701


class FrameCallerResolver:
    """Resolve call sites by walking interpreter frames.

    ``resolve(0)`` names the caller of the function that called ``resolve``;
    each extra level of ``depth`` moves one frame further up the stack.
    """

    def resolve(self, depth: int) -> Tuple[str, int]:
        getframe = getattr(sys, "_getframe", None)
        if getframe is None or depth < 0:
            return UNKNOWN_FILE, UNKNOWN_LINE
        try:
            frame = getframe(depth + 2)
        except ValueError:  # stack is not that deep
            return UNKNOWN_FILE, UNKNOWN_LINE
        return frame.f_code.co_filename, frame.f_lineno


def all_stacks() -> str:
    """Render the current stack of every live thread."""
    names = {t.ident: t.name for t in threading.enumerate()}
    parts = []
    for ident, frame in sys._current_frames().items():
        parts.append(f"\nThread {names.get(ident, '?')} ({ident}):\n")
        parts.extend(traceback.format_stack(frame))
    return "".join(parts)


__all__ = ["CallerResolver", "FrameCallerResolver", "all_stacks", "UNKNOWN_FILE", "UNKNOWN_LINE"]
