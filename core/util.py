from __future__ import annotations
import os, time, pathlib

from core.counters import TIMESTAMP_FORMAT

def now_stamp() -> str:
    """
    Get current local time formatted for the drop log.

    Returns:
        Time as 'YYYY-MM-DD HH:MM:SS'
    """
    return time.strftime(TIMESTAMP_FORMAT, time.localtime())

def ensure_parent(path: str | os.PathLike) -> None:
    """
    Create parent directories for a file path, if they don't exist.

    Args:
        path: File path whose parent directories should be created
    """
    pathlib.Path(path).parent.mkdir(parents=True, exist_ok=True)
