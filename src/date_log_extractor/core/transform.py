"""Line transformation from ISO log format to a readable one.

Input:  2024-12-02T02:23:37.0000 - DEBUG - Cache cleared successfully.
Output: 2024-12-02 02:23:37 DEBUG Cache cleared successfully.
"""

from __future__ import annotations

import re
from enum import Enum

_LINE_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}:\d{2})\.\d+\s*-\s*"
    r"(?P<level>[A-Z]+)\s*-\s*(?P<msg>.*)$"
)


class TransformPolicy(str, Enum):
    """What to do with lines the transformer does not recognize."""

    PASS_THROUGH = "pass-through"
    DROP = "drop"


def transform_line(line: str) -> str | None:
    """Return the readable form of a log line, or None if it does not match."""
    m = _LINE_RE.match(line)
    if not m:
        return None
    return f"{m.group('date')} {m.group('time')} {m.group('level')} {m.group('msg')}"

