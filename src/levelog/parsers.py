import re
from datetime import time as wall_time
from typing import NamedTuple, Optional

from .severity import Severity

_RECORD = re.compile(
    r"^(?P<sev>[IWEF])(?P<month>\d{2})(?P<day>\d{2}) "
    r"(?P<hh>\d{2}):(?P<mm>\d{2}):(?P<ss>\d{2})\.(?P<us>\d{6}) +"
    r"(?P<pid>\d+) (?P<file>[^\s:]+):(?P<line>\d+)\] (?P<msg>.*)$"
)


class Record(NamedTuple):
    severity: Severity
    month: int
    day: int
    time: wall_time
    pid: int
    file: str
    line: int
    message: str


def parse_line(line: str) -> Optional[Record]:
    """
    Parse one emitted line back into its fields.
    Returns None for anything that is not a record header line
    (stack dump continuation lines, blank lines, foreign output).
    """
    match = _RECORD.match(line.rstrip("\r\n"))
    if match is None:
        return None
    try:
        clock = wall_time(int(match["hh"]), int(match["mm"]), int(match["ss"]), int(match["us"]))
    except ValueError:  # out of range fields; not one of ours
        return None
    return Record(
        severity=Severity.from_letter(match["sev"]),
        month=int(match["month"]),
        day=int(match["day"]),
        time=clock,
        pid=int(match["pid"]),
        file=match["file"],
        line=int(match["line"]),
        message=match["msg"],
    )

__all__ = ["Record", "parse_line"]
