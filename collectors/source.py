from __future__ import annotations
from typing import Dict

from core.counters import counter_set
from collectors.sys_net import SysNet, SYS_CLASS_NET
from collectors.qdisc import QdiscStat
from collectors.softnet_stat import SoftnetStat, SOURCE as SOFTNET_SOURCE
from collectors.proc_snmp import ProcNetSnmp, SOURCE as SNMP_SOURCE
from collectors.proc_netstat import ProcNetNetstat, SOURCE as NETSTAT_SOURCE

class CounterSource:
    """
    Produces absolute drop counters for one tick.

    Implementations must return every category and use 0 for anything they
    cannot read instead of raising.
    """

    def sample(self) -> Dict[str, int]:
        raise NotImplementedError

class LinuxCounterSource(CounterSource):
    """
    Reads interface counters from sysfs and tc, system-wide counters from /proc.
    """

    def __init__(self, iface: str,
                 sys_root: str = SYS_CLASS_NET,
                 softnet_path: str = SOFTNET_SOURCE,
                 snmp_path: str = SNMP_SOURCE,
                 netstat_path: str = NETSTAT_SOURCE,
                 tc: str = "tc") -> None:
        self.iface = iface
        self.sys_net = SysNet(iface, root=sys_root)
        self.collectors = [
            self.sys_net,                       # /sys/class/net/<iface>/statistics/*
            QdiscStat(iface, tc=tc),            # tc -s qdisc show dev <iface>
            SoftnetStat(softnet_path),          # /proc/net/softnet_stat
            ProcNetNetstat(netstat_path),       # /proc/net/netstat (TcpExt)
            ProcNetSnmp(snmp_path),             # /proc/net/snmp (Udp)
        ]

    def sample(self) -> Dict[str, int]:
        values: Dict[str, int] = {}
        for collector in self.collectors:
            values.update(collector.read())
        return counter_set(values)
