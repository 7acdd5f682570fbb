import io
import os
import sys

from levelog import Logger, Options
from levelog.caller import FrameCallerResolver, all_stacks


def next_line_num() -> int:
    return sys._getframe(1).f_lineno + 1


def test_depth_zero_names_caller_of_resolving_function():
    resolver = FrameCallerResolver()

    def site():
        return resolver.resolve(0)

    line = next_line_num()
    file, lineno = site()
    assert os.path.basename(file) == "test_caller.py"
    assert lineno == line


def test_each_depth_moves_one_frame_up():
    resolver = FrameCallerResolver()

    def site():
        return resolver.resolve(1)

    def wrapper():
        return site()

    line = next_line_num()
    _, lineno = wrapper()
    assert lineno == line


def test_unwalkable_stack_falls_back_to_sentinel():
    resolver = FrameCallerResolver()
    assert resolver.resolve(100000) == ("???", 0)
    assert resolver.resolve(-1) == ("???", 0)


class _NoStack:
    def resolve(self, depth):
        return "???", 0


def test_engine_uses_injected_resolver():
    sink = io.BytesIO()
    logger = Logger(resolver=_NoStack())
    logger.configure(Options(output=sink))
    logger.info("still logged")
    assert sink.getvalue().endswith(b" ???:0] still logged\n")


def test_all_stacks_lists_current_thread():
    dump = all_stacks()
    assert "Thread MainThread" in dump
    assert "test_all_stacks_lists_current_thread" in dump
