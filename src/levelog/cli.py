import argparse
import sys
import time
import tracemalloc
from datetime import datetime
from typing import Iterable, Iterator, List, Optional

from rich.console import Console
from rich.text import Text

from . import __version__
from .buffers import BufferPool
from .config import Options
from .engine import default_logger
from .errors import ConfigError
from .header import format_header
from .parsers import parse_line
from .severity import Severity

SEVERITY_STYLES = {
    Severity.INFO: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
    Severity.FATAL: "bold white on red",
}


def _maybe_console(args: argparse.Namespace) -> Optional[Console]:
    if getattr(args, "no_color", False):
        return None
    # force_terminal ensures ANSI codes even when output is being captured (for tests)
    return Console(color_system="truecolor", stderr=False, force_terminal=True, highlight=False, soft_wrap=True)


def cmd_emit(args: argparse.Namespace) -> int:
    logger = default_logger()
    try:
        severity = Severity.parse(args.severity)
        logger.configure(Options(output=args.output, threshold=args.threshold))
    except ConfigError as exc:
        print(f"[levelog] {exc}", file=sys.stderr)
        return 2
    logger.print_depth(severity, 0, *args.message)
    logger.flush()
    return 0


def _iter_inputs(paths: List[str]) -> Iterator[str]:
    if not paths:
        yield from sys.stdin
        return
    for path in paths:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as handle:
                yield from handle
        except OSError as exc:
            print(f"[levelog] cannot read '{path}': {exc}", file=sys.stderr)


def cmd_cat(args: argparse.Namespace) -> int:
    try:
        minimum = Severity.parse(args.min_severity)
    except ConfigError as exc:
        print(f"[levelog] {exc}", file=sys.stderr)
        return 2
    console = _maybe_console(args)
    # Continuation lines (stack dumps, multi-line messages) follow the
    # visibility of the record above them.
    showing = True
    current = Severity.INFO
    for raw in _iter_inputs(args.files):
        line = raw.rstrip("\n")
        rec = parse_line(line)
        if rec is not None:
            current = rec.severity
            showing = rec.severity >= minimum
        if not showing:
            continue
        if console is None:
            print(line)
            continue
        style = SEVERITY_STYLES[current]
        text = Text()
        if rec is not None:
            head_len = len(line) - len(rec.message)
            text.append(line[:head_len], style=style)
            text.append(rec.message)
        else:
            text.append(line, style="dim")
        console.print(text)
    return 0


def _header_stream(n: int, pool: BufferPool) -> Iterable[int]:
    when = datetime.now()
    for i in range(n):
        buf = pool.acquire()
        format_header(buf, Severity.INFO, when, 1234, "cli.py", i)
        size = len(buf)
        pool.release(buf)
        yield size


def _cmd_bench(args: argparse.Namespace) -> int:
    pool = BufferPool()
    n = max(1, int(args.n))
    tracemalloc.start()
    start = time.perf_counter()
    total = sum(_header_stream(n, pool))
    elapsed = time.perf_counter() - start
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    rate = n / elapsed if elapsed else float("inf")
    print(f"Formatted {n} headers in {elapsed:.3f}s -> {rate:,.0f} headers/sec")
    print(f"Bytes {total}; buffers allocated={pool.allocated} reused={pool.reused}; peak mem ~{peak/1024:.1f} KiB")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="levelog", description="Write and read glog-style leveled logs.")
    # Global --version (argparse will exit 0 before validating subcommands)
    parser.add_argument(
        "--version",
        action="version",
        version=f"levelog {__version__}",
        help="Show version and exit",
    )
    sub = parser.add_subparsers(dest="cmd")

    emit_parser = sub.add_parser("emit", help="Write one record (FATAL exits with status 255)")
    emit_parser.add_argument("message", nargs="+")
    emit_parser.add_argument("--severity", default="INFO", help="INFO, WARNING, ERROR or FATAL (default: INFO)")
    emit_parser.add_argument("--output", help="Append to this file instead of stderr")
    emit_parser.add_argument("--threshold", help="Discard records below this severity")
    emit_parser.set_defaults(func=cmd_emit)

    cat_parser = sub.add_parser("cat", help="Print log files (or stdin), colorized by severity")
    cat_parser.add_argument("files", nargs="*")
    cat_parser.add_argument("--min-severity", default="INFO", help="Hide records below this severity")
    cat_parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    cat_parser.set_defaults(func=cmd_cat)

    bench_parser = sub.add_parser("bench", help="Measure header formatting throughput")
    bench_parser.add_argument("--n", type=int, default=100000, help="Headers to format")
    bench_parser.set_defaults(func=_cmd_bench)

    # Simple 'version' subcommand for shells/users preferring explicit command
    version_parser = sub.add_parser("version", help="Show version and exit")
    version_parser.set_defaults(func=lambda _: (print(f"levelog {__version__}"), 0)[1])

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    if not getattr(args, "cmd", None):  # No subcommand provided
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
