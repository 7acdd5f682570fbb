import io
import os
from datetime import datetime

import pytest

import levelog
from levelog import ConfigError, Options, ProcessState, Severity, UnknownSeverityError
from levelog.sinks import FileSink, StderrSink, StreamSink


def fixed_clock():
    return datetime(2006, 1, 2, 15, 4, 5, 67890)


def test_omitted_fields_leave_state_untouched(buf):
    levelog.configure(Options(clock=fixed_clock))
    levelog.info("still here")
    out = buf.getvalue().decode()
    assert out.startswith("I0102 15:04:05.067890 ")


def test_invalid_option_rejects_whole_update():
    state = ProcessState()
    before = state.clock
    with pytest.raises(ConfigError):
        state.apply(Options(clock=fixed_clock, pid=-1))
    assert state.clock is before


def test_output_without_write_is_rejected():
    with pytest.raises(ConfigError):
        ProcessState().apply(Options(output=object()))


def test_non_callable_clock_is_rejected():
    with pytest.raises(ConfigError):
        ProcessState().apply(Options(clock="now"))


def test_threshold_discards_lower_severities(buf):
    levelog.configure(Options(threshold="error"))
    levelog.info("dropped")
    levelog.warning("dropped")
    levelog.error("kept")
    lines = buf.getvalue().decode().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("E")


def test_unknown_threshold_reported_at_configure_time():
    with pytest.raises(UnknownSeverityError):
        levelog.configure(Options(threshold="verbose"))
    assert levelog.default_logger().state.threshold is Severity.INFO


def test_path_output_appends_to_file(tmp_path):
    path = tmp_path / "app.log"
    path.write_text("earlier\n", encoding="utf-8")
    try:
        levelog.configure(Options(output=str(path)))
        assert isinstance(levelog.default_logger().state.sink, FileSink)
        levelog.warning("to file")
        levelog.flush()
    finally:
        levelog.reset()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "earlier"
    assert lines[1].startswith("W") and lines[1].endswith("] to file")


def test_text_stream_receives_str():
    out = io.StringIO()
    logger = levelog.Logger()
    logger.configure(Options(output=out))
    logger.info("héllo")
    assert isinstance(logger.state.sink, StreamSink)
    assert out.getvalue().endswith("] héllo\n")


def test_reset_restores_defaults(buf):
    levelog.configure(Options(pid=7, threshold="FATAL"))
    levelog.reset()
    state = levelog.default_logger().state
    assert isinstance(state.sink, StderrSink)
    assert state.pid == os.getpid()
    assert state.threshold is Severity.INFO


def test_default_sink_follows_current_stderr(capsys):
    levelog.reset()
    levelog.warning("to stderr")
    captured = capsys.readouterr()
    assert captured.err.startswith("W")
    assert captured.err.endswith("] to stderr\n")


def test_replaced_file_sink_is_closed(tmp_path):
    logger = levelog.Logger()
    logger.configure(Options(output=str(tmp_path / "first.log")))
    first = logger.state.sink
    logger.configure(Options(output=io.BytesIO()))
    assert first._fh.closed

    logger.configure(Options(output=str(tmp_path / "second.log")))
    second = logger.state.sink
    logger.reset()
    assert second._fh.closed


def test_caller_supplied_stream_is_left_open():
    stream = io.BytesIO()
    logger = levelog.Logger()
    logger.configure(Options(output=stream))
    logger.reset()
    assert not stream.closed
