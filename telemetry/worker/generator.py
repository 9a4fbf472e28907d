"""Synthetic voltage and temperature readings."""

import logging
import math
import random
from datetime import datetime, timezone
from typing import Callable, Optional

from telemetry.shared.models import Reading, source_filename

logger = logging.getLogger(__name__)

VOLTAGE_RANGE = (5.0, 10.0)
TEMPERATURE_RANGE = (-20.0, 20.0)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class ReadingGenerator:
    """Produces one synthetic reading per call.

    The random source is created once, either injected or seeded from
    ``seed``, and is never reseeded between readings.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.rng = rng if rng is not None else random.Random(seed)
        self.clock = clock
        if seed is not None and rng is None:
            logger.info(f"Seeded reading generator with {seed}")

    def _uniform(self, low: float, high: float) -> float:
        """Uniform value in [low, high); rounding never reaches ``high``."""
        value = low + self.rng.random() * (high - low)
        return min(value, math.nextafter(high, low))

    def generate(self) -> Reading:
        """Produce one reading stamped with the clock's current time."""
        now = self.clock()
        reading = Reading(
            timestamp=now,
            voltage=self._uniform(*VOLTAGE_RANGE),
            temperature_c=self._uniform(*TEMPERATURE_RANGE),
            source=source_filename(now),
        )
        logger.info(
            f"Generated reading: voltage={reading.voltage:.2f}V, "
            f"temperature={reading.temperature_c:.2f}C, source={reading.source}"
        )
        return reading
