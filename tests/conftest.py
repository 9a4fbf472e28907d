from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Any

import pymysql
import pytest
import redis

from telemetry.shared.models import Reading
from telemetry.worker.generator import ReadingGenerator

_ENV_KEYS = (
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_DATABASE",
    "GEN_PERIOD_SEC",
    "REDIS_ADDR",
    "CSV_OUT_DIR",
    "CSV_WRITE_ENABLED",
    "TELEMETRY_SEED",
    "TELEMETRY_WORKER_CONFIG",
    "TELEMETRY_ENV",
    "LOG_LEVEL",
)

FIXED_TIME = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)


class FakeCursor:
    def __init__(self, connection: "FakeConnection") -> None:
        self.connection = connection
        self.lastrowid: int | None = None

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None

    def execute(self, sql: str, params: tuple) -> int:
        if self.connection.lose_connection:
            self.connection.open = False
            raise pymysql.err.OperationalError(2013, "Lost connection to MySQL server during query")
        if self.connection.fail_execute:
            raise pymysql.err.OperationalError(2013, "Lost connection to MySQL server")
        self.connection.pending.append(params)
        self.lastrowid = len(self.connection.rows) + len(self.connection.pending)
        return 1


class FakeConnection:
    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.rows: list[tuple] = []
        self.pending: list[tuple] = []
        self.fail_execute = False
        self.lose_connection = False
        self.open = True
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.rows.extend(self.pending)
        self.pending.clear()
        self.commits += 1

    def rollback(self) -> None:
        self.pending.clear()
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True
        self.open = False


class FakeRedis:
    """Minimal stand-in for ``redis.Redis`` recording SET calls."""

    def __init__(self, reachable: bool = True, fail_set: bool = False, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.reachable = reachable
        self.fail_set = fail_set
        self.store: dict[str, tuple[str, int | None]] = {}
        self.set_calls = 0
        self.closed = False

    def ping(self) -> bool:
        if not self.reachable:
            raise redis.ConnectionError("Error 111 connecting to redis:6379. Connection refused.")
        return True

    def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.set_calls += 1
        if self.fail_set:
            raise redis.TimeoutError("Timeout writing to socket")
        self.store[key] = (value, ex)
        return True

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.setattr("telemetry.worker.config.load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setattr("telemetry.shared.config.load_dotenv", lambda *args, **kwargs: False)


@pytest.fixture
def fake_connection(monkeypatch) -> FakeConnection:
    connection = FakeConnection()

    def _connect(**kwargs: Any) -> FakeConnection:
        connection.kwargs = kwargs
        return connection

    monkeypatch.setattr(pymysql, "connect", _connect)
    return connection


@pytest.fixture
def fake_connections(monkeypatch) -> list[FakeConnection]:
    """Every connect opens a new connection, newest last."""
    connections: list[FakeConnection] = []

    def _connect(**kwargs: Any) -> FakeConnection:
        connection = FakeConnection(**kwargs)
        connections.append(connection)
        return connection

    monkeypatch.setattr(pymysql, "connect", _connect)
    return connections


@pytest.fixture
def reading() -> Reading:
    return Reading(
        timestamp=FIXED_TIME,
        voltage=7.256,
        temperature_c=-3.141,
        source="telemetry_20240305_140709.csv",
    )


@pytest.fixture
def generator() -> ReadingGenerator:
    return ReadingGenerator(rng=random.Random(1234), clock=lambda: FIXED_TIME)
