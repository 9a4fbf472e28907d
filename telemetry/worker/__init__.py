"""Telemetry Worker - periodically generates synthetic sensor readings."""

__version__ = "0.1.0"

import logging
import sys

from .export import CsvExporter
from .generator import ReadingGenerator
from .worker import TelemetryWorker

logger = logging.getLogger(__name__)


def main():
    """Entry point for the telemetry worker service."""
    from .config import load_config
    from telemetry.shared.cache import connect_cache
    from telemetry.shared.database import ReadingsStorage
    from telemetry.shared.errors import ConfigError, StoreInitError
    from telemetry.shared.logging import setup_logging

    try:
        config = load_config()
    except ConfigError as e:
        setup_logging()
        logger.critical(f"Configuration failed: {e}")
        sys.exit(1)
    setup_logging(config.log_level)
    logger.info(f"Telemetry worker starting. Generation period: {config.period_seconds} seconds")

    storage = ReadingsStorage(config.db)
    try:
        storage.connect()
    except StoreInitError as e:
        logger.critical(f"Database initialization failed: {e}")
        sys.exit(1)

    cache = connect_cache(config.cache)

    worker = TelemetryWorker(
        generator=ReadingGenerator(seed=config.seed),
        exporter=CsvExporter(config.csv_out_dir, config.csv_write_enabled),
        period_seconds=config.period_seconds,
        storage=storage,
        cache=cache,
    )

    try:
        worker.run(install_signal_handlers=True)
    finally:
        storage.close()
        if cache is not None:
            cache.close()


__all__ = ["CsvExporter", "ReadingGenerator", "TelemetryWorker", "main"]
