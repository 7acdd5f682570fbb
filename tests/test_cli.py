import re
import subprocess
import sys
from pathlib import Path

PYTHON = sys.executable


def run_cli(args, input_text=None):
    cmd = [PYTHON, "-m", "levelog.cli"] + args
    proc = subprocess.run(cmd, input=input_text, capture_output=True, text=True, timeout=60)
    return proc.returncode, proc.stdout, proc.stderr


def make_log(tmp_path: Path) -> Path:
    content = """I1004 00:00:00.000001    4242 server.py:10] startup complete
W1004 00:00:01.000002    4242 server.py:22] retrying connection host=alpha
  detail: connection refused
I1004 00:00:02.000003    4242 server.py:30] heartbeat seq=1
E1004 00:00:03.000004    4242 db.py:88] failed to connect host=alpha
"""
    p = tmp_path / "app.log"
    p.write_text(content, encoding="utf-8")
    return p


def test_emit_to_file(tmp_path):
    out = tmp_path / "emit.log"
    code, _, err = run_cli(["emit", "--severity", "warning", "--output", str(out), "disk", "full"])
    assert code == 0, err
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("W")
    assert re.search(r" cli\.py:\d+\] disk full$", lines[0])


def test_emit_defaults_to_stderr():
    code, out, err = run_cli(["emit", "hello"])
    assert code == 0
    assert out == ""
    assert err.startswith("I") and err.endswith("] hello\n")


def test_emit_below_threshold_writes_nothing(tmp_path):
    out = tmp_path / "quiet.log"
    code, _, _ = run_cli(["emit", "--threshold", "ERROR", "--output", str(out), "chatty"])
    assert code == 0
    assert out.read_text(encoding="utf-8") == ""


def test_emit_fatal_exits_255():
    code, _, err = run_cli(["emit", "--severity", "FATAL", "boom"])
    assert code == 255
    assert err.startswith("F")
    assert err.splitlines()[0].endswith("] boom")
    assert "Thread MainThread" in err


def test_emit_unknown_severity():
    code, _, err = run_cli(["emit", "--severity", "loud", "x"])
    assert code == 2
    assert "[levelog] unknown severity 'loud'" in err


def test_cat_filters_by_severity(tmp_path):
    log = make_log(tmp_path)
    code, out, err = run_cli(["cat", str(log), "--min-severity", "WARNING", "--no-color"])
    assert code == 0, err
    lines = out.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("W")
    assert lines[1] == "  detail: connection refused"
    assert lines[2].startswith("E")


def test_cat_reads_stdin(tmp_path):
    log = make_log(tmp_path)
    code, out, _ = run_cli(["cat", "--no-color"], input_text=log.read_text(encoding="utf-8"))
    assert code == 0
    assert out == log.read_text(encoding="utf-8")


def test_cat_colors_by_default(tmp_path):
    log = make_log(tmp_path)
    code, out, _ = run_cli(["cat", str(log)])
    assert code == 0
    assert "\x1b[" in out
    assert "failed to connect host=alpha" in out


def test_bench_subcommand_smoke():
    code, out, err = run_cli(["bench", "--n", "2000"])
    assert code == 0, err
    assert re.search(r"Formatted 2000 headers in .*? -> \d+[,.]?\d* headers/sec", out), out
    assert "buffers allocated=1 reused=1999" in out


def test_cli_version_matches_package():
    code, out, err = run_cli(["--version"])
    assert code == 0
    m = re.match(r"levelog\s+(\d+\.\d+\.\d+)", (out + err).strip())
    assert m, f"Unexpected version output: {out + err}"
    import levelog
    assert m.group(1) == levelog.__version__


def test_version_subcommand():
    code, out, _ = run_cli(["version"])
    assert code == 0
    assert out.startswith("levelog ")
