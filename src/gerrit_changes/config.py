"""Configuration loading and validation for gerrit-changes."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_LIMIT = 20
DEFAULT_TIMEOUT_SECONDS = 30

LOCAL_CONFIG_PATH = Path(".gerrit-changes.yaml")
USER_CONFIG_PATH = Path("~/.config/gerrit-changes/config.yaml")

_BOOL_STRINGS = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}


@dataclass
class GerritConfig:
    """Gerrit server connection configuration."""

    url: str
    username: str | None = None
    password: str | None = None
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    verify_ssl: bool = True


@dataclass
class OutputSettings:
    """Output configuration."""

    color: bool = True
    default_limit: int = DEFAULT_LIMIT


@dataclass
class Config:
    """Complete application configuration."""

    gerrit: GerritConfig
    output: OutputSettings = field(default_factory=OutputSettings)


def find_config_path() -> Path | None:
    """Return the first existing config file, local before per-user."""
    for path in (LOCAL_CONFIG_PATH, USER_CONFIG_PATH.expanduser()):
        if path.exists():
            return path
    return None


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file and environment.

    Args:
        config_path: Path to config file (default: searched, see find_config_path)

    Returns:
        Loaded configuration
    """
    if config_path is None:
        config_path = find_config_path()

    raw_config: dict[str, Any] = {}
    if config_path is not None and config_path.exists():
        with open(config_path) as f:
            raw_config = yaml.safe_load(f) or {}

    raw_config = _expand_env_vars(raw_config)

    return _parse_config(raw_config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in config."""
    if isinstance(obj, str):
        if obj.startswith("${") and obj.endswith("}"):
            env_var = obj[2:-1]
            return os.environ.get(env_var, "")
        return obj
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def _as_int(value: Any) -> Any:
    """Coerce to int, leaving unconvertible values for validate_config to report."""
    if isinstance(value, bool):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


def _as_bool(value: Any) -> Any:
    """Coerce "true"/"false" style strings, leaving anything else unchanged."""
    if isinstance(value, str) and value.strip().lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.strip().lower()]
    return value


def _parse_config(raw: dict[str, Any]) -> Config:
    """Parse raw config dict into Config object."""
    gerrit_raw = raw.get("gerrit") or {}
    gerrit = GerritConfig(
        url=gerrit_raw.get("url") or os.environ.get("GERRIT_URL", ""),
        username=gerrit_raw.get("username") or os.environ.get("GERRIT_USERNAME") or None,
        password=gerrit_raw.get("password") or os.environ.get("GERRIT_PASSWORD") or None,
        timeout_seconds=_as_int(gerrit_raw.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
        verify_ssl=_as_bool(gerrit_raw.get("verify_ssl", True)),
    )

    out_raw = raw.get("output") or {}
    output = OutputSettings(
        color=_as_bool(out_raw.get("color", True)),
        default_limit=_as_int(out_raw.get("default_limit", DEFAULT_LIMIT)),
    )

    return Config(gerrit=gerrit, output=output)


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not config.gerrit.url:
        errors.append("Missing Gerrit URL (set GERRIT_URL or gerrit.url)")
    elif not config.gerrit.url.startswith(("http://", "https://")):
        errors.append(f"Gerrit URL must start with http:// or https:// (got {config.gerrit.url})")

    if bool(config.gerrit.username) != bool(config.gerrit.password):
        errors.append("gerrit.username and gerrit.password must be set together")

    for name, value in (
        ("timeout_seconds", config.gerrit.timeout_seconds),
        ("default_limit", config.output.default_limit),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{name} must be an integer (got {value!r})")
        elif value <= 0:
            errors.append(f"{name} must be positive (got {value})")

    for name, value in (
        ("verify_ssl", config.gerrit.verify_ssl),
        ("color", config.output.color),
    ):
        if not isinstance(value, bool):
            errors.append(f"{name} must be true or false (got {value!r})")

    return errors
