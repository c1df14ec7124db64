"""
report_drops.py
Reads the CSV drop log written by the monitor and prints aggregate reports:
interval counts and drop rate, totals per category, the worst intervals,
drops by time of day and the most recent intervals.

Usage:
    python3 -m output.report_drops [/var/log/network_drops.log] [--by-minute]
"""
from __future__ import annotations

import argparse
import csv
import logging
import os
import sys
from collections import defaultdict, deque
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from core.config import DEFAULT_LOG_PATH
from core.counters import CATEGORIES, COUNTER_NAMES, IntervalRecord, LOG_COLUMNS

logger = logging.getLogger(__name__)

RULE = "=" * 80

# ---------------------- Reading ----------------------

def read_records(path: str) -> Iterator[IntervalRecord]:
    """
    Lazily yields the records of a drop log, skipping the header row, blank
    rows and rows that do not parse. Call again to re-read the file.
    """
    # One record per line; bad bytes or a runaway field only cost that line.
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        for lineno, line in enumerate(f, start=1):
            if "\ufffd" in line:
                logger.debug("%s:%d: skipping row: invalid UTF-8", path, lineno)
                continue
            try:
                row = next(csv.reader([line]), [])
            except csv.Error as e:
                logger.debug("%s:%d: skipping row: %s", path, lineno, e)
                continue
            if not row or not any(field.strip() for field in row):
                continue
            if lineno == 1 and row[0].strip() == LOG_COLUMNS[0]:
                continue
            try:
                yield IntervalRecord.from_row(row)
            except ValueError as e:
                logger.debug("%s:%d: skipping row: %s", path, lineno, e)
                continue

# ---------------------- Reports ----------------------

def interval_counts(records: Iterable[IntervalRecord]) -> Tuple[int, int, Optional[float]]:
    """
    Returns:
        (total intervals, intervals with drops, drop rate in percent).
        The rate is None for an empty log.
    """
    total = 0
    with_drops = 0
    for rec in records:
        total += 1
        if rec.total_drops > 0:
            with_drops += 1
    rate = 100.0 * with_drops / total if total > 0 else None
    return total, with_drops, rate

def category_totals(records: Iterable[IntervalRecord]) -> Dict[str, int]:
    totals = {name: 0 for name in COUNTER_NAMES}
    for rec in records:
        for name in COUNTER_NAMES:
            totals[name] += rec.deltas.get(name, 0)
    return totals

def worst_intervals(records: Iterable[IntervalRecord], limit: int = 10) -> List[IntervalRecord]:
    """Highest total_drops first; ties keep file order."""
    return sorted(records, key=lambda r: r.total_drops, reverse=True)[:limit]

def bucket_key(timestamp: str, bucket: str = "hour") -> str:
    """
    Time-of-day key of a 'YYYY-MM-DD HH:MM:SS' timestamp:
    'HH' for hour buckets, 'HH:MM' for minute buckets.
    """
    clock = timestamp.split(" ", 1)[1]
    if bucket == "minute":
        return clock[:5]
    return clock[:2]

def drops_by_time_bucket(records: Iterable[IntervalRecord], bucket: str = "hour") -> List[Tuple[str, int]]:
    if bucket not in ("hour", "minute"):
        raise ValueError(f"unknown bucket: {bucket}")
    drops: Dict[str, int] = defaultdict(int)
    for rec in records:
        drops[bucket_key(rec.timestamp, bucket)] += rec.total_drops
    return sorted(drops.items())

def recent_activity(records: Iterable[IntervalRecord], limit: int = 20) -> List[IntervalRecord]:
    return list(deque(records, maxlen=limit))

# ---------------------- Output ----------------------

def print_report(path: str, bucket: str = "hour") -> None:
    print(RULE)
    print("Network Drop Analysis Report")
    print(f"Log File: {path}")
    print(RULE)

    total, with_drops, rate = interval_counts(read_records(path))
    print(f"Total Monitoring Intervals: {total}")
    print(f"Intervals with Drops: {with_drops}")
    if rate is not None:
        print(f"Drop Rate: {rate:.2f}%")

    print("\n=== Total Drops by Category ===")
    totals = category_totals(read_records(path))
    for cat in CATEGORIES:
        print(f"{cat.report_label + ':':21s}{totals[cat.name]:10d}")

    print("\n=== Top 10 Worst Intervals ===")
    for rec in worst_intervals(read_records(path)):
        print(f"{rec.timestamp}: {rec.total_drops} drops")

    if bucket == "minute":
        print("\n=== Drops by Minute of Day ===")
    else:
        print("\n=== Drops by Hour of Day ===")
    for key, drops in drops_by_time_bucket(read_records(path), bucket):
        print(f"{key}:00 - {drops} drops")

    print("\n=== Last 20 Monitoring Intervals ===")
    print("Timestamp           | Drops | Severity")
    print("--------------------+-------+---------")
    for rec in recent_activity(read_records(path)):
        print(f"{rec.timestamp} | {rec.total_drops:5d} | {rec.severity.value}")

    print(RULE)

def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Analyze a network drop log")
    p.add_argument("logfile", nargs="?", default=DEFAULT_LOG_PATH,
                   help=f"drop log to analyze (default: {DEFAULT_LOG_PATH})")
    p.add_argument("--by-minute", action="store_true",
                   help="group drops by HH:MM instead of by hour")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not os.path.isfile(args.logfile):
        print(f"Error: Log file not found: {args.logfile}")
        return 1

    print_report(args.logfile, "minute" if args.by_minute else "hour")
    return 0

if __name__ == "__main__":
    sys.exit(main())
