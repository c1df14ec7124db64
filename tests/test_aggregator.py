"""Tests for the baseline tracker, delta engine and severity classifier."""

import pytest

from core.aggregator import Aggregator
from core.counters import COUNTER_NAMES, IntervalRecord, Severity, classify, counter_set


class TestClassify:

    @pytest.mark.parametrize("total,expected", [
        (0, Severity.OK),
        (1, Severity.WARN),
        (99, Severity.WARN),
        (100, Severity.CRIT),
        (5000, Severity.CRIT),
    ])
    def test_three_way_partition(self, total, expected):
        assert classify(total, 100) is expected

    def test_threshold_of_one(self):
        assert classify(0, 1) is Severity.OK
        assert classify(1, 1) is Severity.CRIT


class TestAggregator:

    def test_first_sample_only_seeds(self):
        agg = Aggregator()
        assert not agg.seeded
        assert agg.update(counter_set({"nic_rx_dropped": 42})) is None
        assert agg.seeded

    def test_deltas_against_previous_sample(self):
        agg = Aggregator()
        agg.update(counter_set({"nic_rx_dropped": 10, "softirq_dropped": 3}))
        deltas = agg.update(counter_set({"nic_rx_dropped": 15, "softirq_dropped": 3}))
        assert deltas["nic_rx_dropped"] == 5
        assert deltas["softirq_dropped"] == 0
        assert list(deltas) == COUNTER_NAMES

        # baseline moved forward
        deltas = agg.update(counter_set({"nic_rx_dropped": 16, "softirq_dropped": 3}))
        assert deltas["nic_rx_dropped"] == 1

    def test_counter_reset_clamps_to_zero(self):
        agg = Aggregator()
        agg.update(counter_set({"nic_rx_dropped": 1000, "tcp_pruned": 5}))
        deltas = agg.update(counter_set({"nic_rx_dropped": 3, "tcp_pruned": 9}))
        assert deltas["nic_rx_dropped"] == 0
        assert deltas["tcp_pruned"] == 4

        # the reset value becomes the new baseline
        deltas = agg.update(counter_set({"nic_rx_dropped": 10, "tcp_pruned": 9}))
        assert deltas["nic_rx_dropped"] == 7

    def test_missing_category_counts_as_zero(self):
        agg = Aggregator()
        agg.update({"nic_rx_dropped": 4})
        deltas = agg.update({"nic_rx_dropped": 6, "udp_rcvbuf_errors": 2})
        assert deltas["udp_rcvbuf_errors"] == 2
        assert deltas["nic_tx_dropped"] == 0


class TestTick:

    def test_no_record_from_seed(self):
        agg = Aggregator()
        assert agg.tick(counter_set(), "2024-01-01 00:00:00", "eth0", 100) is None
        assert agg.iteration == 0

    def test_record_fields(self):
        agg = Aggregator()
        agg.tick(counter_set(), "2024-01-01 00:00:00", "eth0", 100)
        rec = agg.tick(counter_set({"nic_rx_dropped": 60, "udp_sndbuf_errors": 40}),
                       "2024-01-01 00:00:05", "eth0", 100)
        assert isinstance(rec, IntervalRecord)
        assert rec.iteration == 1
        assert rec.interface == "eth0"
        assert rec.timestamp == "2024-01-01 00:00:05"
        assert rec.total_drops == 100
        assert rec.severity is Severity.CRIT

    def test_total_equals_sum_of_clamped_deltas(self):
        samples = [
            {"nic_rx_dropped": 10, "qdisc_dropped": 50, "syn_queue_dropped": 1},
            {"nic_rx_dropped": 12, "qdisc_dropped": 0, "syn_queue_dropped": 4},
            {"nic_rx_dropped": 12, "qdisc_dropped": 7, "syn_queue_dropped": 2},
            {"nic_rx_dropped": 30, "qdisc_dropped": 8, "syn_queue_dropped": 2},
        ]
        agg = Aggregator()
        records = [agg.tick(counter_set(s), "2024-01-01 00:00:00", "eth0", 100) for s in samples]
        assert records[0] is None
        for rec in records[1:]:
            assert rec.total_drops == sum(rec.deltas.values())
            assert all(v >= 0 for v in rec.deltas.values())
        assert [r.iteration for r in records[1:]] == [1, 2, 3]
        assert [r.total_drops for r in records[1:]] == [5, 7, 19]
        assert [r.severity for r in records[1:]] == [Severity.WARN] * 3


class TestIntervalRecordRow:

    def test_from_row_rejects_garbage(self):
        with pytest.raises(ValueError):
            IntervalRecord.from_row(["2024-01-01 00:00:00", "1", "eth0"])
        with pytest.raises(ValueError):
            IntervalRecord.from_row(["yesterday", "1", "eth0", "0"] + ["0"] * 11 + ["OK"])
        with pytest.raises(ValueError):
            IntervalRecord.from_row(["2024-01-01 00:00:00", "1", "eth0", "0"] + ["0"] * 11 + ["BAD"])

    def test_row_order(self):
        rec = IntervalRecord(
            timestamp="2024-01-01 10:00:00", iteration=7, interface="bond0", total_drops=3,
            deltas=counter_set({"accept_queue_overflow": 3}), severity=Severity.WARN)
        row = rec.to_row()
        assert row[:4] == ["2024-01-01 10:00:00", "7", "bond0", "3"]
        assert row[10] == "3"  # accept_queue column
        assert row[-1] == "WARN"
        assert IntervalRecord.from_row(row) == rec
