"""Telemetry worker - generates readings and fans them out every period."""

import logging
import signal
import threading
from typing import Callable, List, Optional

from telemetry.shared.cache import LatestReadingCache
from telemetry.shared.database import ReadingsStorage
from telemetry.shared.models import Reading

from .export import CsvExporter
from .generator import ReadingGenerator

logger = logging.getLogger(__name__)


class TelemetryWorker:
    """Runs generate, persist, cache and export once per period.

    Storage and cache are optional. Which steps a cycle runs is decided
    once here, so a missing cache is never touched by any cycle.
    """

    def __init__(
        self,
        generator: ReadingGenerator,
        exporter: CsvExporter,
        period_seconds: float,
        storage: Optional[ReadingsStorage] = None,
        cache: Optional[LatestReadingCache] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.generator = generator
        self.exporter = exporter
        self.period_seconds = period_seconds
        self.storage = storage
        self.cache = cache
        self.stop_event = stop_event or threading.Event()

        self._steps: List[Callable[[Reading], object]] = []
        if storage is not None:
            self._steps.append(storage.store_reading)
        if cache is not None:
            self._steps.append(cache.publish)
        else:
            logger.info("Caching disabled for this run")
        self._steps.append(exporter.export)

    def run_cycle(self) -> Reading:
        """Generate one reading and hand it to every enabled step.

        A step that raises is logged and the remaining steps still run.
        """
        reading = self.generator.generate()
        for step in self._steps:
            try:
                step(reading)
            except Exception:
                logger.exception(f"Error in {getattr(step, '__qualname__', step)} for {reading.source}")
        return reading

    def stop(self) -> None:
        self.stop_event.set()

    def _setup_signal_handlers(self):
        """Set up signal handlers for graceful shutdown."""
        def signal_handler(signum, frame):
            signame = signal.Signals(signum).name
            logger.info(f"Received {signame}, shutting down...")
            self.stop()

        signal.signal(signal.SIGTERM, signal_handler)
        signal.signal(signal.SIGINT, signal_handler)

    def run(self, install_signal_handlers: bool = False) -> None:
        """Run cycles until the stop event is set (blocking).

        The sleep starts after a cycle finishes, so cycle time adds to the
        period.
        """
        if install_signal_handlers:
            self._setup_signal_handlers()

        logger.info(f"Starting telemetry worker (period={self.period_seconds}s)")

        while not self.stop_event.is_set():
            logger.info("--- Starting work cycle ---")
            try:
                self.run_cycle()
            except Exception as e:
                logger.error(f"Error in work cycle: {e}")

            logger.info(f"--- Work cycle finished. Sleeping for {self.period_seconds}s ---")
            self.stop_event.wait(self.period_seconds)

        logger.info("Telemetry worker stopped")
