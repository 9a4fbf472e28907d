"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv

from .errors import ConfigError


def get_environment() -> str:
    """Get the current environment name.

    Returns:
        Environment name from TELEMETRY_ENV, defaults to 'telemetry'.
    """
    return os.getenv("TELEMETRY_ENV", "telemetry")


def get_config_path(
    config_name: Optional[str] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """Get path to a configuration file.

    Args:
        config_name: Name of config file (without path). If None, uses
            config-{environment}.yaml based on TELEMETRY_ENV.
        config_dir: Directory containing config files. If None, uses
            the 'config' directory at the repo root.

    Returns:
        Path to the configuration file.
    """
    if config_dir is None:
        # repo_root/config/, assuming an editable install from repo_root
        package_dir = Path(__file__).parent.parent.parent
        config_dir = package_dir / "config"

    config_dir = Path(config_dir)

    if config_name is None:
        env = get_environment()
        config_name = f"config-{env}.yaml"

    return config_dir / config_name


def load_yaml_config(
    config_path: Optional[Union[str, Path]] = None,
    load_env: bool = True,
) -> dict:
    """Load YAML configuration file.

    Args:
        config_path: Path to config file. If None, uses get_config_path().
        load_env: Whether to load .env file first.

    Returns:
        Configuration dictionary.

    Raises:
        ConfigError: If config file doesn't exist or is invalid YAML.
    """
    if load_env:
        load_dotenv()

    if config_path is None:
        config_path = get_config_path()
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def get_log_level(config: dict) -> str:
    """Extract log level from config, with sensible default.

    Args:
        config: Configuration dictionary.

    Returns:
        Log level string (e.g., 'INFO', 'DEBUG').
    """
    return str(config.get("log_level", "INFO")).upper()
