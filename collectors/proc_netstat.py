from __future__ import annotations
from typing import Dict

from collectors.proc_snmp import read_counters

SOURCE = "/proc/net/netstat"

# TcpExt names behind the `netstat -s` lines:
#   ListenDrops      "SYNs to LISTEN sockets dropped"
#   ListenOverflows  "times the listen queue of a socket overflowed"
#   PruneCalled      "packets pruned from receive queue ..."
#   TCPRcvCollapsed  "packets collapsed in receive queue ..."
NEEDED_COUNTERS = {
    'TcpExt': {
        'ListenDrops': 'syn_queue_dropped',
        'ListenOverflows': 'accept_queue_overflow',
        'PruneCalled': 'tcp_pruned',
        'TCPRcvCollapsed': 'tcp_collapsed',
    },
}

class ProcNetNetstat:
    """
    Collector for extended TCP drop counters from /proc/net/netstat.
    """
    def __init__(self, path: str = SOURCE) -> None:
        self.path = path

    def read(self) -> Dict[str, int]:
        return read_counters(self.path, NEEDED_COUNTERS)
