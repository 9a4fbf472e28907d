"""Configuration loading for the telemetry worker."""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from dotenv import load_dotenv

from telemetry.shared.cache import CacheConfig
from telemetry.shared.config import get_config_path, get_log_level, load_yaml_config
from telemetry.shared.database import DBConfig

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_SECONDS = 300

_TRUE_VALUES = {"1", "true", "yes", "on"}
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_period(raw: Any, default: int = DEFAULT_PERIOD_SECONDS) -> int:
    """Parse the generation period in seconds.

    Only plain decimal integers with an optional sign are accepted. Absent,
    unparsable and non-positive values fall back to ``default``.
    """
    if raw is None:
        return default
    text = str(raw).strip()
    if not _INTEGER_RE.fullmatch(text):
        logger.warning(f"Could not parse generation period {raw!r}, using {default} seconds")
        return default
    period = int(text)
    if period <= 0:
        logger.warning(f"Generation period must be positive (got {period}), using {default} seconds")
        return default
    return period


def parse_bool(raw: Any, default: bool = False) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUE_VALUES


def parse_seed(raw: Any) -> Optional[int]:
    if raw is None or str(raw).strip() == "":
        return None
    text = str(raw).strip()
    if not _INTEGER_RE.fullmatch(text):
        logger.warning(f"Ignoring non-integer TELEMETRY_SEED {raw!r}")
        return None
    return int(text)


@dataclass(frozen=True)
class WorkerConfig:
    """Everything the worker needs, built once at startup."""
    db: DBConfig = field(default_factory=DBConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    period_seconds: int = DEFAULT_PERIOD_SECONDS
    csv_out_dir: str = "."
    csv_write_enabled: bool = False
    seed: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "WorkerConfig":
        """Create config from a YAML-style dictionary."""
        csv_data = data.get("csv") or {}
        return cls(
            db=DBConfig.from_dict(data.get("db") or {}),
            cache=CacheConfig.from_dict(data.get("cache") or {}),
            period_seconds=parse_period(data.get("period_seconds")),
            csv_out_dir=str(csv_data.get("out_dir", ".")),
            csv_write_enabled=parse_bool(csv_data.get("write_enabled")),
            seed=parse_seed(data.get("seed")),
            log_level=get_log_level(data),
        )


def _apply_env(data: dict) -> dict:
    """Overlay environment variables on top of YAML values."""
    for section in ("db", "cache", "csv"):
        if not isinstance(data.get(section), dict):
            data[section] = {}

    db = data["db"]
    for key, env_name in (
        ("host", "DB_HOST"),
        ("port", "DB_PORT"),
        ("user", "DB_USER"),
        ("password", "DB_PASSWORD"),
        ("database", "DB_DATABASE"),
    ):
        if (value := os.environ.get(env_name)) is not None:
            db[key] = value

    if (redis_addr := os.environ.get("REDIS_ADDR")):
        data["cache"]["address"] = redis_addr

    csv_data = data["csv"]
    if (out_dir := os.environ.get("CSV_OUT_DIR")) is not None:
        csv_data["out_dir"] = out_dir
    if (write_enabled := os.environ.get("CSV_WRITE_ENABLED")) is not None:
        csv_data["write_enabled"] = write_enabled

    if (period := os.environ.get("GEN_PERIOD_SEC")) is not None:
        data["period_seconds"] = period
    if (seed := os.environ.get("TELEMETRY_SEED")) is not None:
        data["seed"] = seed
    if (log_level := os.environ.get("LOG_LEVEL")):
        data["log_level"] = log_level
    return data


def load_config(config_path: Optional[str] = None) -> WorkerConfig:
    """Load worker configuration from an optional YAML file and the environment.

    Args:
        config_path: Path to YAML config file. If not provided, looks for
            TELEMETRY_WORKER_CONFIG, then the repo's config directory. A
            missing default file is not an error.

    Returns:
        WorkerConfig instance.

    Raises:
        ConfigError: If an explicitly requested config file is missing or invalid.
    """
    load_dotenv()

    if config_path is None:
        config_path = os.environ.get("TELEMETRY_WORKER_CONFIG")

    data: dict = {}
    if config_path:
        data = load_yaml_config(config_path, load_env=False)
    else:
        default_path = get_config_path()
        if default_path.exists():
            data = load_yaml_config(default_path, load_env=False)

    return WorkerConfig.from_dict(_apply_env(data))
