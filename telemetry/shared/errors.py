"""Exception types shared by telemetry services."""


class TelemetryError(Exception):
    """Base class for telemetry service errors."""


class ConfigError(TelemetryError):
    """Raised when configuration cannot be loaded."""


class StoreInitError(TelemetryError):
    """Raised when the relational store cannot be opened at startup.

    This is the only condition that stops the worker.
    """
