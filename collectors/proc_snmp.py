from __future__ import annotations
import logging
from typing import Dict, List, Mapping, Set

logger = logging.getLogger(__name__)

SOURCE = "/proc/net/snmp"

NEEDED_COUNTERS = {
    'Udp': {'RcvbufErrors': 'udp_rcvbuf_errors', 'SndbufErrors': 'udp_sndbuf_errors'},
}

def parse_sections(text: str, wanted: Mapping[str, Set[str]]) -> Dict[str, Dict[str, int]]:
    """
    Parse the header/value line pairs used by /proc/net/snmp and /proc/net/netstat.

    Args:
        text: File contents
        wanted: Section name -> counter names to keep

    Returns:
        Section name -> {counter: value}. Values that do not parse are skipped.
    """
    out: Dict[str, Dict[str, int]] = {}
    lines = [l.strip() for l in text.splitlines() if l.strip()]

    for i in range(0, len(lines) - 1, 2):
        header = lines[i]
        values = lines[i+1]

        section = header.split(":")[0]
        if section not in wanted or values.split(":")[0] != section:
            continue

        keys: List[str] = header.split(":", 1)[1].split()
        vals: List[str] = values.split(":", 1)[1].split()

        section_dict = out.setdefault(section, {})
        for counter, value in zip(keys, vals):
            if counter not in wanted[section]:
                continue
            try:
                section_dict[counter] = int(value)
            except ValueError:
                continue
    return out

def read_counters(path: str, needed: Mapping[str, Mapping[str, str]]) -> Dict[str, int]:
    """
    Read a header/value proc file and map the needed counters to counter names.

    Every counter name in needed is present in the result; unavailable ones are 0.
    """
    out = {name: 0 for section in needed.values() for name in section.values()}
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return out

    parsed = parse_sections(text, {s: set(c) for s, c in needed.items()})
    for section, counters in needed.items():
        for proc_name, name in counters.items():
            out[name] = parsed.get(section, {}).get(proc_name, 0)
    return out

class ProcNetSnmp:
    """
    Collector for UDP buffer error counters from /proc/net/snmp.
    """
    def __init__(self, path: str = SOURCE) -> None:
        self.path = path

    def read(self) -> Dict[str, int]:
        return read_counters(self.path, NEEDED_COUNTERS)
