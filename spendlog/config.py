"""Configuration file management for spendlog."""

import copy
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from spendlog.domain.models import DEFAULT_CURRENCY

DEFAULT_RATES_API_URL = "https://api.exchangerate-api.com/v4/latest/USD"
DEFAULT_RATES_TIMEOUT = 10.0

DEFAULT_CONFIG: dict[str, Any] = {
    "default_currency": DEFAULT_CURRENCY,
    # Empty means the XDG data location
    "data_file": "",
    "log_level": "WARNING",
    "rates": {
        "api_url": DEFAULT_RATES_API_URL,
        "timeout": DEFAULT_RATES_TIMEOUT,
    },
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "spendlog" / "config.toml"


def get_default_data_path() -> Path:
    """Get the default transactions file path (XDG compliant)."""
    return get_xdg_data_home() / "spendlog" / "transactions.json"


def _merge(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(DEFAULT_CONFIG, f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file, filling in defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary. Defaults only if the file doesn't exist.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, "rb") as f:
        return _merge(DEFAULT_CONFIG, tomllib.load(f))


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_data_path(config: dict[str, Any] | None = None) -> Path:
    """Resolve the transactions file path.

    Precedence: SPENDLOG_DATA_FILE environment variable, then the
    ``data_file`` config key, then the XDG default.

    Args:
        config: Loaded configuration. If None, loads it from the default location.

    Returns:
        Path to the transactions file.
    """
    env_path = os.environ.get("SPENDLOG_DATA_FILE")
    if env_path:
        return Path(env_path).expanduser()

    if config is None:
        config = load_config()

    data_file = config.get("data_file")
    if data_file:
        return Path(data_file).expanduser()

    return get_default_data_path()
