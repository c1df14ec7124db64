from __future__ import annotations
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, NamedTuple

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Category(NamedTuple):
    name: str
    column: str
    label: str          # live breakdown
    report_label: str   # category totals report


# Fixed order: breakdown lines, log columns and report rows all follow it.
CATEGORIES: List[Category] = [
    Category("nic_rx_dropped", "nic_rx", "NIC RX Dropped", "NIC RX Dropped"),
    Category("nic_tx_dropped", "nic_tx", "NIC TX Dropped", "NIC TX Dropped"),
    Category("nic_rx_missed", "nic_missed", "NIC RX Missed", "NIC RX Missed"),
    Category("qdisc_dropped", "qdisc", "qdisc Dropped", "qdisc Dropped"),
    Category("softirq_dropped", "softirq", "Softirq Dropped", "Softirq Dropped"),
    Category("syn_queue_dropped", "syn_queue", "SYN Queue Dropped", "SYN Queue Dropped"),
    Category("accept_queue_overflow", "accept_queue", "Accept Queue Overflow", "Accept Queue Ovfl"),
    Category("tcp_pruned", "tcp_pruned", "TCP Pruned", "TCP Pruned"),
    Category("tcp_collapsed", "tcp_collapsed", "TCP Collapsed", "TCP Collapsed"),
    Category("udp_rcvbuf_errors", "udp_rcvbuf", "UDP RcvBuf Full", "UDP RcvBuf Errors"),
    Category("udp_sndbuf_errors", "udp_sndbuf", "UDP SndBuf Full", "UDP SndBuf Errors"),
]

COUNTER_NAMES: List[str] = [c.name for c in CATEGORIES]

LOG_COLUMNS: List[str] = (
    ["timestamp", "iteration", "interface", "total_drops"]
    + [c.column for c in CATEGORIES]
    + ["severity"]
)


def counter_set(values: Mapping[str, int] | None = None) -> Dict[str, int]:
    """
    Build a CounterSet in category order.

    Unknown keys are ignored, missing ones default to 0.
    """
    values = values or {}
    return {name: int(values.get(name, 0)) for name in COUNTER_NAMES}


class Severity(str, Enum):
    OK = "OK"
    WARN = "WARN"
    CRIT = "CRIT"


def classify(total: int, threshold: int) -> Severity:
    """Map an interval total to OK / WARN / CRIT."""
    if total == 0:
        return Severity.OK
    if total < threshold:
        return Severity.WARN
    return Severity.CRIT


@dataclass(frozen=True)
class IntervalRecord:
    """
    One tick's result, persisted as one log row.

    Invariant: total_drops == sum(deltas.values()).
    """
    timestamp: str
    iteration: int
    interface: str
    total_drops: int
    deltas: Dict[str, int]
    severity: Severity

    def to_row(self) -> List[str]:
        return (
            [self.timestamp, str(self.iteration), self.interface, str(self.total_drops)]
            + [str(self.deltas.get(name, 0)) for name in COUNTER_NAMES]
            + [self.severity.value]
        )

    @classmethod
    def from_row(cls, row: List[str]) -> "IntervalRecord":
        """
        Parse a log row. Raises ValueError on a short row, a bad timestamp,
        a non-integer field or an unknown severity.
        """
        if len(row) < len(LOG_COLUMNS):
            raise ValueError(f"expected {len(LOG_COLUMNS)} fields, got {len(row)}")
        timestamp = row[0].strip()
        # strptime also takes single-digit fields; require the zero-padded form
        if time.strftime(TIMESTAMP_FORMAT, time.strptime(timestamp, TIMESTAMP_FORMAT)) != timestamp:
            raise ValueError(f"timestamp not in YYYY-MM-DD HH:MM:SS form: {timestamp!r}")
        deltas = {name: int(v) for name, v in zip(COUNTER_NAMES, row[4:4 + len(CATEGORIES)])}
        return cls(
            timestamp=timestamp,
            iteration=int(row[1]),
            interface=row[2].strip(),
            total_drops=int(row[3]),
            deltas=deltas,
            severity=Severity(row[len(LOG_COLUMNS) - 1].strip()),
        )
