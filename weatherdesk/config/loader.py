"""YAML config loader with environment override and runtime get/set."""

import json
import os
from pathlib import Path
from typing import Any

import yaml

from weatherdesk.config.defaults import API_KEY_ENV_VAR
from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import ConfigurationError


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing path yields defaults. OPENWEATHERMAP_API_KEY in the
    environment overrides weather.api_key.
    """
    raw: dict = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    env_key = os.environ.get(API_KEY_ENV_VAR)
    if env_key:
        raw.setdefault("weather", {})["api_key"] = env_key

    return AppConfig(**raw)


def require_api_key(config: AppConfig) -> str:
    """Return the weather API key or raise ConfigurationError."""
    key = config.weather.api_key.strip()
    if not key:
        raise ConfigurationError("Weather API key not configured")
    return key


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'feed.page_size'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: AppConfig, dotted_key: str, value: Any) -> AppConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new AppConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if part not in target:
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return AppConfig(**data)


def redacted_dump(config: AppConfig) -> str:
    """JSON dump with the API key masked, for `config show`."""
    data = json.loads(config.model_dump_json())
    if data["weather"]["api_key"]:
        data["weather"]["api_key"] = "***"
    return json.dumps(data, indent=2)
