from __future__ import annotations
import sys
from typing import List, TextIO

from core.counters import CATEGORIES, IntervalRecord, Severity

RED = "\033[0;31m"
YELLOW = "\033[1;33m"
GREEN = "\033[0;32m"
BLUE = "\033[0;34m"
NC = "\033[0m"

STYLE = {
    Severity.OK: (GREEN, "✓"),
    Severity.WARN: (YELLOW, "⚠"),
    Severity.CRIT: (RED, "✖"),
}

def use_color(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())

def colorize(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{NC}" if enabled else text

def render(record: IntervalRecord, color: bool = False) -> List[str]:
    """
    Lines for one interval: a summary line, plus one line per nonzero
    category when the interval had drops.
    """
    code, symbol = STYLE[record.severity]
    lines = [colorize(
        f"[{record.timestamp}] #{record.iteration:04d} | {symbol} {record.severity.value} "
        f"| Drops: {record.total_drops}", code, color)]

    if record.total_drops > 0:
        nonzero = [c for c in CATEGORIES if record.deltas.get(c.name, 0) > 0]
        for i, cat in enumerate(nonzero):
            branch = "╰─" if i == len(nonzero) - 1 else "├─"
            lines.append("  " + colorize(f"{branch} {cat.label}: {record.deltas[cat.name]}", code, color))
        lines.append("")
    return lines

class IntervalReporter:
    """Prints interval records to the console."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = sys.stdout if stream is None else stream
        self.color = use_color(self.stream)

    def report(self, record: IntervalRecord) -> None:
        for line in render(record, self.color):
            print(line, file=self.stream)
        self.stream.flush()
