from __future__ import annotations
import csv
import os

from core.counters import IntervalRecord, LOG_COLUMNS
from core.util import ensure_parent

class CsvLog:
    """
    CSV sink for interval records.

    Appends each record as one row to the specified file. Creates parent
    directories and the header row if the file doesn't exist yet.
    """

    def __init__(self, path: str) -> None:
        """
        Initialize CSV sink with output file path.

        Args:
            path: File path for the drop log
        """
        self.path = path
        ensure_parent(self.path)
        if not os.path.exists(self.path) or os.path.getsize(self.path) == 0:
            self._append(LOG_COLUMNS)

    def write(self, record: IntervalRecord) -> None:
        """
        Write a single record as one CSV row.

        Args:
            record: Finalized interval record
        """
        self._append(record.to_row())

    def _append(self, row) -> None:
        with open(self.path, "a", encoding="utf-8", newline="") as f:
            csv.writer(f, lineterminator="\n").writerow(row)
