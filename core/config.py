from __future__ import annotations
import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
import yaml  # from pyyaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yml"
DEFAULT_IFACE = "eth0"
DEFAULT_INTERVAL = 5.0
DEFAULT_LOG_PATH = "/var/log/network_drops.log"
DEFAULT_THRESHOLD = 100


class ConfigError(ValueError):
    """Raised when the merged configuration is unusable."""


@dataclass
class MonitorConfig:
    iface: str = DEFAULT_IFACE
    poll_interval_sec: float = DEFAULT_INTERVAL
    alert_threshold: int = DEFAULT_THRESHOLD
    log_path: str = DEFAULT_LOG_PATH

    def validate(self) -> "MonitorConfig":
        if not self.iface:
            raise ConfigError("interface name must not be empty")
        if not math.isfinite(self.poll_interval_sec) or self.poll_interval_sec <= 0:
            raise ConfigError(f"interval must be positive, got {self.poll_interval_sec}")
        if self.alert_threshold < 1:
            raise ConfigError(f"alert threshold must be >= 1, got {self.alert_threshold}")
        return self


def read_yaml(path: str, explicit: bool = False) -> Dict[str, Any]:
    """
    Load the YAML config file.

    A missing file yields an empty dict; the warning is only logged when the
    path was given explicitly.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        if explicit:
            logger.warning("Config file %s not found, using defaults", path)
        else:
            logger.debug("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    return data


def _env_number(env: Mapping[str, str], name: str, cast):
    raw = env.get(name)
    if raw is None:
        return None
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Invalid %s value: %s", name, raw)
        return None


def load_config(path: str = DEFAULT_CONFIG_PATH, explicit: bool = False,
                env: Optional[Mapping[str, str]] = None) -> MonitorConfig:
    """
    Load configuration from YAML file and override with environment variables.

    Environment variables override YAML values:
    - NETDROP_IFACE: Network interface (e.g., eth0)
    - NETDROP_POLL_INTERVAL: Polling interval in seconds (e.g., 5)
    - NETDROP_ALERT_THRESHOLD: Drops per interval that count as critical
    - NETDROP_OUTPUT_PATH: Log file path (e.g., /var/log/network_drops.log)

    Args:
        path: Path to the YAML configuration file
        explicit: Whether the path was requested by the user
        env: Environment mapping, defaults to os.environ

    Returns:
        MonitorConfig merged from defaults, file and environment
    """
    env = os.environ if env is None else env
    raw = read_yaml(path, explicit)
    cfg = MonitorConfig()

    try:
        if "iface" in raw:
            cfg.iface = str(raw["iface"])
        if "poll_interval_sec" in raw:
            cfg.poll_interval_sec = float(raw["poll_interval_sec"])
        if "alert_threshold" in raw:
            cfg.alert_threshold = int(raw["alert_threshold"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{path}: {e}") from e
    out = raw.get("output") or {}
    if isinstance(out, dict) and out.get("path"):
        cfg.log_path = str(out["path"])

    if "NETDROP_IFACE" in env:
        cfg.iface = env["NETDROP_IFACE"]
    interval = _env_number(env, "NETDROP_POLL_INTERVAL", float)
    if interval is not None:
        cfg.poll_interval_sec = interval
    threshold = _env_number(env, "NETDROP_ALERT_THRESHOLD", int)
    if threshold is not None:
        cfg.alert_threshold = threshold
    if "NETDROP_OUTPUT_PATH" in env:
        cfg.log_path = env["NETDROP_OUTPUT_PATH"]

    return cfg
