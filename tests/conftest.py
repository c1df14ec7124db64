"""Shared test fixtures."""

from pathlib import Path
from typing import Dict, List

import pytest

from collectors.source import CounterSource
from core.counters import LOG_COLUMNS, counter_set


class StaticCounterSource(CounterSource):
    """Replays a fixed list of samples, repeating the last one when exhausted."""

    def __init__(self, samples: List[Dict[str, int]]):
        self.samples = [counter_set(s) for s in samples]
        self.calls = 0

    @property
    def exhausted(self) -> bool:
        return self.calls >= len(self.samples)

    def sample(self) -> Dict[str, int]:
        idx = min(self.calls, len(self.samples) - 1)
        self.calls += 1
        return dict(self.samples[idx])


def log_row(timestamp, iteration, total, nic_rx=0, softirq=0, severity="OK", iface="eth0"):
    """CSV line for a drop log with only nic_rx and softirq populated."""
    fields = [timestamp, str(iteration), iface, str(total),
              str(nic_rx), "0", "0", "0", str(softirq), "0", "0", "0", "0", "0", "0", severity]
    return ",".join(fields)


@pytest.fixture
def write_log(tmp_path):
    """Write a drop log with header and the given data lines; returns its path."""

    def _write(lines: List[str], name: str = "drops.log") -> str:
        path = tmp_path / name
        path.write_text("\n".join([",".join(LOG_COLUMNS)] + lines) + "\n", encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def sysfs(tmp_path):
    """Fake /sys/class/net with helpers to add interfaces."""
    root = tmp_path / "sys_class_net"
    root.mkdir()

    def _add(iface: str, stats: Dict[str, str] | None = None,
             bonding: Dict[str, str] | None = None) -> Path:
        iface_dir = root / iface
        (iface_dir / "statistics").mkdir(parents=True)
        for name, value in (stats or {}).items():
            (iface_dir / "statistics" / name).write_text(value + "\n")
        if bonding is not None:
            (iface_dir / "bonding").mkdir()
            for name, value in bonding.items():
                (iface_dir / "bonding" / name).write_text(value + "\n")
        return iface_dir

    _add.root = str(root)
    return _add
