"""Database configuration and storage for telemetry readings."""

import logging
from dataclasses import dataclass
from typing import Optional

import pymysql

from .errors import StoreInitError
from .models import Reading

logger = logging.getLogger(__name__)

DEFAULT_DB_PORT = 3306
DEFAULT_TIMEOUT = 5

INSERT_READING_SQL = """
    INSERT INTO telemetry_readings
    (created_at, voltage, temp_c, source)
    VALUES (%s, %s, %s, %s)
"""


def _to_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid integer {value!r} in database config, using {default}")
        return default


@dataclass
class DBConfig:
    """Database connection configuration."""
    host: str = "localhost"
    port: int = DEFAULT_DB_PORT
    user: str = ""
    password: str = ""
    database: str = "telemetry"
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: dict) -> "DBConfig":
        """Create config from dictionary (YAML values overlaid with DB_* env vars)."""
        return cls(
            host=data.get("host", "localhost"),
            port=_to_int(data.get("port", DEFAULT_DB_PORT), DEFAULT_DB_PORT),
            user=str(data.get("user", "")),
            password=str(data.get("password", "")),
            database=data.get("database", "telemetry"),
            timeout=_to_int(data.get("timeout", DEFAULT_TIMEOUT), DEFAULT_TIMEOUT),
        )

    def describe(self) -> str:
        """Connection target without credentials, for log lines."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class ReadingsStorage:
    """Writes telemetry readings to MySQL.

    The connection is opened by ``connect()`` and reused for every insert.
    If the link drops it is reopened on the next insert. Readings are only
    ever inserted, never read back or updated.
    """

    def __init__(self, db_config: DBConfig):
        """Initialize storage with database configuration.

        Args:
            db_config: Database connection configuration.
        """
        self.db_config = db_config
        self._connection: Optional[pymysql.Connection] = None

    def _open(self) -> pymysql.Connection:
        """Open a connection with TLS disabled and the session pinned to UTC."""
        return pymysql.connect(
            host=self.db_config.host,
            port=self.db_config.port,
            user=self.db_config.user,
            password=self.db_config.password,
            database=self.db_config.database,
            connect_timeout=self.db_config.timeout,
            read_timeout=self.db_config.timeout,
            write_timeout=self.db_config.timeout,
            ssl_disabled=True,
            init_command="SET time_zone = '+00:00'",
        )

    def connect(self) -> None:
        """Open the database connection.

        Raises:
            StoreInitError: If the connection cannot be established.
        """
        try:
            self._connection = self._open()
        except pymysql.MySQLError as e:
            raise StoreInitError(
                f"Could not connect to database {self.db_config.describe()}: {e}"
            ) from e
        logger.info(f"Connected to database {self.db_config.describe()}")

    def _get_connection(self) -> pymysql.Connection:
        """Get or reopen the database connection."""
        if self._connection is None or not self._connection.open:
            if self._connection is not None:
                logger.warning(f"Database connection lost, reconnecting to {self.db_config.describe()}")
            self._connection = self._open()
        return self._connection

    def store_reading(self, reading: Reading) -> bool:
        """Insert a single reading.

        Args:
            reading: The reading to store.

        Returns:
            True if successful, False otherwise.
        """
        try:
            conn = self._get_connection()
        except pymysql.MySQLError as e:
            logger.error(f"Error storing reading: could not reconnect: {e}")
            return False

        try:
            with conn.cursor() as cursor:
                cursor.execute(
                    INSERT_READING_SQL,
                    (
                        reading.timestamp.replace(tzinfo=None),
                        reading.voltage,
                        reading.temperature_c,
                        reading.source,
                    ),
                )
                row_id = cursor.lastrowid
            conn.commit()
            logger.info(f"Stored reading id={row_id} in database")
            return True
        except pymysql.MySQLError as e:
            logger.error(f"Error storing reading: {e}")
            try:
                conn.rollback()
            except pymysql.MySQLError as rollback_error:
                logger.debug(f"Rollback failed: {rollback_error}")
            return False

    def close(self):
        """Close the database connection."""
        if self._connection:
            try:
                self._connection.close()
            except pymysql.MySQLError as e:
                logger.debug(f"Error closing database connection: {e}")
            self._connection = None
