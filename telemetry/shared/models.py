"""Core data model for synthetic telemetry readings."""

from dataclasses import dataclass
from datetime import datetime, timezone

SOURCE_FILENAME_FORMAT = "telemetry_%Y%m%d_%H%M%S.csv"


def format_timestamp(timestamp: datetime) -> str:
    """Render a timestamp as RFC 3339 in UTC with second precision."""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime("%Y-%m-%dT%H:%M:%SZ")


def source_filename(timestamp: datetime) -> str:
    """Export filename for a reading generated at ``timestamp``."""
    return timestamp.strftime(SOURCE_FILENAME_FORMAT)


@dataclass(frozen=True)
class Reading:
    """A single synthetic telemetry data point.

    The surrogate id is assigned by the store on insert and is not carried
    on the in-memory reading.
    """
    timestamp: datetime
    voltage: float
    temperature_c: float
    source: str

    def cache_value(self) -> str:
        """Human-readable form stored under the latest-reading cache key."""
        return (
            f"Voltage: {self.voltage:.2f}V, Temp: {self.temperature_c:.2f}C, "
            f"Time: {format_timestamp(self.timestamp)}"
        )

    def csv_line(self) -> str:
        """One ``timestamp,voltage,temperature`` line, newline terminated."""
        return f"{format_timestamp(self.timestamp)},{self.voltage:.2f},{self.temperature_c:.2f}\n"
