import pytest

from telemetry.shared.cache import DEFAULT_REDIS_ADDR
from telemetry.shared.config import get_config_path, load_yaml_config
from telemetry.shared.errors import ConfigError
from telemetry.worker.config import DEFAULT_PERIOD_SECONDS, WorkerConfig, load_config, parse_period


@pytest.mark.parametrize(
    "raw", [None, "", "abc", "1.5", "  ", "-10", "0", "1_000", "0x10", "5s", "\u0663", True]
)
def test_parse_period_falls_back_to_default(raw) -> None:
    assert parse_period(raw) == DEFAULT_PERIOD_SECONDS == 300


@pytest.mark.parametrize("raw,expected", [("1", 1), (" 60 ", 60), (15, 15), ("+5", 5), ("007", 7)])
def test_parse_period_accepts_positive_integers(raw, expected) -> None:
    assert parse_period(raw) == expected


def test_defaults_without_config(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("TELEMETRY_ENV", "missing")
    config = load_config()

    assert config.period_seconds == 300
    assert config.cache.address == DEFAULT_REDIS_ADDR
    assert config.cache.key == "latest_telemetry_data"
    assert config.cache.ttl == 600
    assert config.db.port == 3306
    assert config.csv_write_enabled is False
    assert config.seed is None


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TELEMETRY_ENV", "missing")
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "3307")
    monkeypatch.setenv("DB_USER", "worker")
    monkeypatch.setenv("DB_PASSWORD", "secret")
    monkeypatch.setenv("DB_DATABASE", "readings")
    monkeypatch.setenv("GEN_PERIOD_SEC", "1")
    monkeypatch.setenv("REDIS_ADDR", "cache.internal:6380")
    monkeypatch.setenv("CSV_OUT_DIR", str(tmp_path))
    monkeypatch.setenv("CSV_WRITE_ENABLED", "true")
    monkeypatch.setenv("TELEMETRY_SEED", "99")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config()

    assert config.db.host == "db.internal"
    assert config.db.port == 3307
    assert config.db.user == "worker"
    assert config.db.password == "secret"
    assert config.db.database == "readings"
    assert config.period_seconds == 1
    assert config.cache.address == "cache.internal:6380"
    assert config.csv_out_dir == str(tmp_path)
    assert config.csv_write_enabled is True
    assert config.seed == 99
    assert config.log_level == "DEBUG"


def test_unparsable_period_env_uses_default(monkeypatch) -> None:
    monkeypatch.setenv("TELEMETRY_ENV", "missing")
    monkeypatch.setenv("GEN_PERIOD_SEC", "five minutes")
    assert load_config().period_seconds == 300


def test_yaml_file_is_overridden_by_environment(monkeypatch, tmp_path) -> None:
    config_file = tmp_path / "worker.yaml"
    config_file.write_text(
        "period_seconds: 30\n"
        "log_level: warning\n"
        "db:\n  host: yaml-db\n  database: yaml_telemetry\n"
        "cache:\n  address: yaml-redis:6379\n"
        "csv:\n  out_dir: /data/csv\n  write_enabled: true\n"
    )
    monkeypatch.setenv("TELEMETRY_WORKER_CONFIG", str(config_file))
    monkeypatch.setenv("DB_HOST", "env-db")

    config = load_config()

    assert config.period_seconds == 30
    assert config.log_level == "WARNING"
    assert config.db.host == "env-db"
    assert config.db.database == "yaml_telemetry"
    assert config.cache.address == "yaml-redis:6379"
    assert config.csv_out_dir == "/data/csv"
    assert config.csv_write_enabled is True


def test_missing_explicit_config_file_raises(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "nope.yaml"))


def test_invalid_yaml_raises(tmp_path) -> None:
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("db: [unclosed\n")
    with pytest.raises(ConfigError):
        load_yaml_config(config_file, load_env=False)


def test_config_path_follows_environment_name(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TELEMETRY_ENV", "staging")
    assert get_config_path(config_dir=tmp_path) == tmp_path / "config-staging.yaml"


def test_worker_config_is_frozen() -> None:
    config = WorkerConfig()
    with pytest.raises(AttributeError):
        config.period_seconds = 5  # type: ignore[misc]
