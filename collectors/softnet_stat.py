from __future__ import annotations
import logging
from typing import Dict

logger = logging.getLogger(__name__)

SOURCE = "/proc/net/softnet_stat"

class SoftnetStat:
    """
    Sums 'dropped' across all CPUs.
    Fields are hexadecimal: 0=processed, 1=dropped, 2=time_squeeze, ...
    """
    def __init__(self, path: str = SOURCE) -> None:
        self.path = path

    def read(self) -> Dict[str, int]:
        total_dropped = 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                for line in f:
                    cols = line.split()
                    if len(cols) < 2:
                        continue
                    try:
                        total_dropped += int(cols[1], 16)
                    except ValueError:
                        continue
        except OSError as e:
            logger.debug("Cannot read %s: %s", self.path, e)
            return {"softirq_dropped": 0}
        return {"softirq_dropped": total_dropped}
