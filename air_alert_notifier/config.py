"""Central configuration for air_alert_notifier."""

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import Any, Mapping

from .models.alerts import Severity
from .models.settings import NotificationProfile, Settings

logger = logging.getLogger(__name__)

CONFIG_ENV = "ALERT_CONFIG"

DEFAULT_RAISE_TITLE = "ВСІ В УКРИТТЯ!!!"
DEFAULT_RAISE_BODY = "Увага! Повітряна тривога в регіоні: {region}!"
DEFAULT_CLEAR_TITLE = "МОЖНА ПОВЕРТАТИСЬ НА РОБОЧІ МІСЦЯ!"
DEFAULT_CLEAR_BODY = "Відбій повітряної тривоги в регіоні: {region}!"
DEFAULT_REQUEST_TIMEOUT_S = 10.0

# Environment variables that take precedence over the config file.
_ENV_OVERRIDES: dict[str, str] = {
    "ALERT_REGION": "region",
    "ALERT_DATA_URL": "data_url",
    "ALERT_UPDATE_INTERVAL": "update_interval",
    "ALERT_REQUEST_TIMEOUT": "request_timeout",
}


class ConfigError(ValueError):
    """Raised when a configuration field is missing or invalid."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def _read_file(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the JSON config file into a dict.

    Raises:
        ConfigError: If the file is missing, unreadable or not a JSON object.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError("config", f"cannot read {file_path}: {e}") from e
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ConfigError("config", f"{file_path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config", f"{file_path} must contain a JSON object")
    return data


def _apply_env(raw: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    merged = dict(raw)
    for var, key in _ENV_OVERRIDES.items():
        value = env.get(var)
        if value is not None and value.strip():
            merged[key] = value.strip()
    return merged


def _require_str(raw: Mapping[str, Any], key: str, allow_empty: bool = False) -> str:
    if key not in raw:
        raise ConfigError(key, "is required")
    value = raw[key]
    if not isinstance(value, str):
        raise ConfigError(key, "must be a string")
    if not value.strip() and not allow_empty:
        raise ConfigError(key, "must not be empty")
    return value


def _optional_str(raw: Mapping[str, Any], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(key, "must be a string")
    return value


def _parse_interval(raw: Mapping[str, Any]) -> int:
    """Parse ``update_interval`` as a positive whole number of seconds.

    Accepts ints, integral floats and numeric strings (from the environment).
    Booleans are rejected even though they are ints in Python.
    """
    if "update_interval" not in raw:
        raise ConfigError("update_interval", "is required")
    value = raw["update_interval"]
    if isinstance(value, bool):
        raise ConfigError("update_interval", "must be an integer")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ConfigError("update_interval", "must be an integer") from None
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigError("update_interval", "must be a whole number of seconds")
        value = int(value)
    if not isinstance(value, int):
        raise ConfigError("update_interval", "must be an integer")
    if value <= 0:
        raise ConfigError("update_interval", "must be greater than 0")
    return value


def _parse_timeout(raw: Mapping[str, Any], interval: int) -> float:
    value = raw.get("request_timeout")
    if value is None:
        return min(DEFAULT_REQUEST_TIMEOUT_S, float(interval))
    if isinstance(value, bool):
        raise ConfigError("request_timeout", "must be a number")
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError("request_timeout", "must be a number") from None
    if not math.isfinite(timeout):
        raise ConfigError("request_timeout", "must be a finite number")
    if timeout <= 0:
        raise ConfigError("request_timeout", "must be greater than 0")
    if timeout >= interval:
        logger.warning(
            "request_timeout (%ss) is not shorter than update_interval (%ss); "
            "a hung request will delay the next poll",
            timeout,
            interval,
        )
    return timeout


def _read_settings(raw: Mapping[str, Any]) -> Settings:
    """Validate a raw config mapping and build Settings.

    Fields are checked in a fixed order and the first invalid one is reported.

    Returns:
        Settings object with all configuration values.

    Raises:
        ConfigError: Naming the first missing or invalid field.
    """
    region = _require_str(raw, "region")
    alert_on = _require_str(raw, "alert_on", allow_empty=True)
    alert_off = _require_str(raw, "alert_off", allow_empty=True)
    data_url = _require_str(raw, "data_url").strip()
    interval = _parse_interval(raw)
    timeout = _parse_timeout(raw, interval)

    raise_profile = NotificationProfile(
        sound=alert_on,
        title=_optional_str(raw, "raise_title", DEFAULT_RAISE_TITLE),
        body=_optional_str(raw, "raise_body", DEFAULT_RAISE_BODY),
        severity=Severity.WARNING,
    )
    clear_profile = NotificationProfile(
        sound=alert_off,
        title=_optional_str(raw, "clear_title", DEFAULT_CLEAR_TITLE),
        body=_optional_str(raw, "clear_body", DEFAULT_CLEAR_BODY),
        severity=Severity.INFO,
    )

    return Settings(
        region=region,
        alert_on=alert_on,
        alert_off=alert_off,
        data_url=data_url,
        update_interval=interval,
        request_timeout=timeout,
        raise_profile=raise_profile,
        clear_profile=clear_profile,
    )


def resolve_config_path(
    arg: str | None, env: Mapping[str, str] | None = None
) -> str | None:
    """Return the config path from the CLI argument, else ``ALERT_CONFIG``."""
    if arg:
        return arg
    env = os.environ if env is None else env
    return env.get(CONFIG_ENV) or None


def load_settings(
    path: str | os.PathLike[str], env: Mapping[str, str] | None = None
) -> Settings:
    """Load, override from the environment and validate the config file.

    Args:
        path: Path to the JSON config file.
        env: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If the file cannot be used or a field is invalid.
    """
    raw = _read_file(path)
    merged = _apply_env(raw, os.environ if env is None else env)
    settings = _read_settings(merged)
    logger.debug(
        "Loaded settings: region=%s url=%s interval=%ss timeout=%ss",
        settings.region,
        settings.data_url,
        settings.update_interval,
        settings.request_timeout,
    )
    return settings


__all__ = ["ConfigError", "CONFIG_ENV", "load_settings", "resolve_config_path"]
