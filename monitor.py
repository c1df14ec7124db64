from __future__ import annotations
import argparse
import logging
import signal
import sys
import threading
from typing import Callable, List, Optional

from core.aggregator import Aggregator
from core.config import ConfigError, DEFAULT_CONFIG_PATH, load_config
from core.counters import IntervalRecord
from core.scheduler import Ticker
from core.util import now_stamp
from output.console import BLUE, GREEN, RED, YELLOW, IntervalReporter, colorize, use_color
from output.csv_log import CsvLog

# Collectors
from collectors.source import CounterSource, LinuxCounterSource
from collectors.sys_net import SysNet, SYS_CLASS_NET

logger = logging.getLogger(__name__)

RULE = "=" * 80

class Monitor:
    """
    One monitoring loop: sample, compute deltas, report, log.

    The first tick only seeds the baseline and produces no record.
    """

    def __init__(self, source: CounterSource, sink: CsvLog, reporter: IntervalReporter,
                 iface: str, threshold: int, clock: Callable[[], str] = now_stamp) -> None:
        self.source = source
        self.sink = sink
        self.reporter = reporter
        self.iface = iface
        self.threshold = threshold
        self.clock = clock
        self.aggregator = Aggregator()

    def tick(self) -> Optional[IntervalRecord]:
        ts = self.clock()
        sample = self.source.sample()
        record = self.aggregator.tick(sample, ts, self.iface, self.threshold)
        if record is None:
            logger.debug("Baseline seeded at %s", ts)
            return None
        self.reporter.report(record)
        self.sink.write(record)
        return record

def request_stop(stop: threading.Event) -> None:
    # Called from a signal handler: the interrupted main thread may hold the
    # Event's lock inside wait(), so set it from another thread.
    threading.Thread(target=stop.set, daemon=True).start()

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Monitor NIC, qdisc, softirq, TCP and UDP packet drops per interval")
    p.add_argument("interface", nargs="?", help="interface to watch (default: eth0)")
    p.add_argument("interval", nargs="?", type=float, help="seconds between checks (default: 5)")
    p.add_argument("logfile", nargs="?", help="CSV log (default: /var/log/network_drops.log)")
    p.add_argument("--threshold", type=int, help="drops per interval counted as critical (default: 100)")
    p.add_argument("--config", help=f"YAML config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p.parse_args(argv)

def main(argv: Optional[List[str]] = None,
         source: Optional[CounterSource] = None,
         ticker: Optional[Ticker] = None,
         stop: Optional[threading.Event] = None,
         sys_root: str = SYS_CLASS_NET) -> int:
    """
    Entry point of the monitor.

    This function:
    1. Merges configuration from YAML, environment variables and arguments
    2. Checks the interface exists and prints the startup banner
    3. Seeds the baseline and then reports one interval per tick
    4. Stops on SIGINT/SIGTERM after the current tick completes

    Returns:
        Process exit code
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    try:
        cfg = load_config(args.config or DEFAULT_CONFIG_PATH, explicit=bool(args.config))
        if args.interface:
            cfg.iface = args.interface
        if args.interval is not None:
            cfg.poll_interval_sec = args.interval
        if args.logfile:
            cfg.log_path = args.logfile
        if args.threshold is not None:
            cfg.alert_threshold = args.threshold
        cfg.validate()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    color = use_color(sys.stdout)
    print(RULE)
    print(colorize("Production Network Monitor", GREEN, color))
    print(RULE)
    print(f"Interface:       {cfg.iface}")
    print(f"Check Interval:  {cfg.poll_interval_sec:g}s")
    print(f"Log File:        {cfg.log_path}")
    print(f"Alert Threshold: {cfg.alert_threshold} drops/interval")

    sys_net = SysNet(cfg.iface, root=sys_root)
    if not sys_net.exists():
        print(colorize(f"ERROR: Interface {cfg.iface} not found", RED, color))
        return 1
    bond = sys_net.bond_info()
    if bond:
        mode, slaves = bond
        print(colorize(f"Bond Mode:       {mode}", YELLOW, color))
        print(colorize(f"Bond Slaves:     {' '.join(slaves)}", YELLOW, color))
    if source is None:
        source = LinuxCounterSource(cfg.iface, sys_root=sys_root)

    print(RULE)
    print(colorize(f"Monitoring started at {now_stamp()}", BLUE, color))
    print(colorize("Press Ctrl+C to stop", BLUE, color))
    print(RULE)

    monitor = Monitor(
        source=source,
        sink=CsvLog(cfg.log_path),
        reporter=IntervalReporter(sys.stdout),
        iface=cfg.iface,
        threshold=cfg.alert_threshold,
    )

    if stop is None:
        stop = threading.Event()
    previous = {}
    if threading.current_thread() is threading.main_thread():
        for sig in (signal.SIGINT, signal.SIGTERM):
            previous[sig] = signal.signal(sig, lambda signum, frame: request_stop(stop))

    ticker = ticker or Ticker(cfg.poll_interval_sec)
    try:
        ticker.run(monitor.tick, stop)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    print()
    print(colorize("Stopping monitor...", YELLOW, color))
    return 0

if __name__ == "__main__":
    sys.exit(main())
