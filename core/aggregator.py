from __future__ import annotations
from typing import Dict, Mapping, Optional

from core.counters import COUNTER_NAMES, IntervalRecord, classify

class Aggregator:
    """
    Calculates per-interval deltas between consecutive counter samples.

    Holds the baseline (last absolute sample). The first sample only seeds it.
    """

    def __init__(self) -> None:
        """Initialize aggregator with no previous sample."""
        self._prev: Dict[str, int] | None = None
        self.iteration = 0

    @property
    def seeded(self) -> bool:
        return self._prev is not None

    def update(self, sample: Mapping[str, int]) -> Optional[Dict[str, int]]:
        """
        Calculate deltas between the current sample and the baseline.

        Args:
            sample: Absolute counter values keyed by category name

        Returns:
            Delta per category, in category order. A negative delta
            (counter reset/wrap) is clamped to 0.
            None on first call (no baseline available yet).
        """
        current = {name: int(sample.get(name, 0)) for name in COUNTER_NAMES}
        if self._prev is None:
            self._prev = current
            return None
        deltas: Dict[str, int] = {}
        for name in COUNTER_NAMES:
            d = current[name] - self._prev[name]
            if d < 0:
                d = 0  # reset/wrap
            deltas[name] = d
        self._prev = current
        return deltas

    def tick(self, sample: Mapping[str, int], timestamp: str,
             interface: str, threshold: int) -> Optional[IntervalRecord]:
        """
        Feed one sample and build the interval record for it.

        Returns None for the seeding sample.
        """
        deltas = self.update(sample)
        if deltas is None:
            return None
        self.iteration += 1
        total = sum(deltas.values())
        return IntervalRecord(
            timestamp=timestamp,
            iteration=self.iteration,
            interface=interface,
            total_drops=total,
            deltas=deltas,
            severity=classify(total, threshold),
        )
