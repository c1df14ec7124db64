from __future__ import annotations
import logging
import os
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

SYS_CLASS_NET = "/sys/class/net"

# statistics/* file -> counter name
NEEDED_STATS = {
    "rx_dropped": "nic_rx_dropped",
    "tx_dropped": "nic_tx_dropped",
    "rx_missed_errors": "nic_rx_missed",
}

class SysNet:
    """
    Collector for network interface information from /sys/class/net.

    Collects:
    - Interface drop statistics (rx_dropped, tx_dropped, rx_missed_errors)
    - Existence of the interface
    - Bonding mode and slaves, when the interface is a bond
    """

    def __init__(self, iface: str, root: str = SYS_CLASS_NET) -> None:
        """
        Initialize SysNet collector for a specific network interface.

        Args:
            iface: Network interface name (e.g., 'eth0', 'bond0')
            root: sysfs net directory, overridable for tests
        """
        self.iface = iface
        self.base = os.path.join(root, iface)

    def exists(self) -> bool:
        return os.path.isdir(self.base)

    def read(self) -> Dict[str, int]:
        """
        Read interface drop counters from sysfs.

        Returns:
            Dictionary of counter name to value. Counters whose file is
            missing or unreadable are 0.
        """
        stats_dir = os.path.join(self.base, "statistics")
        out: Dict[str, int] = {}
        for fname, counter in NEEDED_STATS.items():
            p = os.path.join(stats_dir, fname)
            try:
                with open(p, "r", encoding="utf-8") as f:
                    out[counter] = int(f.read().strip())
            except (OSError, ValueError) as e:
                logger.debug("Cannot read %s: %s", p, e)
                out[counter] = 0
        return out

    def bond_info(self) -> Optional[Tuple[str, List[str]]]:
        """
        Bonding mode and slave interfaces.

        Returns:
            (mode, slaves) for a bond with at least one slave, else None
        """
        bond_dir = os.path.join(self.base, "bonding")
        if not os.path.isdir(bond_dir):
            return None
        try:
            with open(os.path.join(bond_dir, "slaves"), "r", encoding="utf-8") as f:
                slaves = f.read().split()
        except OSError:
            return None
        if not slaves:
            return None
        try:
            with open(os.path.join(bond_dir, "mode"), "r", encoding="utf-8") as f:
                mode = f.read().strip()  # e.g. "802.3ad 4"
        except OSError:
            mode = "unknown"
        return mode, slaves
