from __future__ import annotations
import logging
import re
import subprocess
from typing import Dict

logger = logging.getLogger(__name__)

DROPPED_RE = re.compile(r"dropped (\d+)")

def parse_qdisc_dropped(text: str) -> int:
    """First 'dropped N' in `tc -s qdisc show` output (the root qdisc), or 0."""
    m = DROPPED_RE.search(text)
    return int(m.group(1)) if m else 0

class QdiscStat:
    """
    Collector for queueing-discipline drops via `tc -s qdisc show dev <iface>`.
    """
    def __init__(self, iface: str, tc: str = "tc") -> None:
        self.iface = iface
        self.tc = tc

    def read(self) -> Dict[str, int]:
        cmd = [self.tc, "-s", "qdisc", "show", "dev", self.iface]
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=True)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.debug("%s failed: %s", " ".join(cmd), e)
            return {"qdisc_dropped": 0}
        return {"qdisc_dropped": parse_qdisc_dropped(proc.stdout)}
