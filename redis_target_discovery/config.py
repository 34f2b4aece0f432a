"""Frozen dataclasses for configuration and YAML loader with env-var interpolation."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_REDIS_ADDR = "redis://localhost:6379"


def _interpolate_env(value: str) -> str:
    """Replace ${ENV_VAR} placeholders with environment variable values."""

    def _replace(match: re.Match) -> str:
        env_key = match.group(1)
        env_val = os.environ.get(env_key)
        if env_val is None:
            raise ConfigError(f"Environment variable '{env_key}' is not set")
        return env_val

    return _ENV_PATTERN.sub(_replace, value)


def _walk_and_interpolate(obj: Any) -> Any:
    """Recursively interpolate env vars in strings throughout a nested structure."""
    if isinstance(obj, str):
        return _interpolate_env(obj)
    if isinstance(obj, dict):
        return {k: _walk_and_interpolate(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_walk_and_interpolate(v) for v in obj]
    return obj


@dataclass(frozen=True)
class RedisConfig:
    addr: str = ""  # empty falls back to DEFAULT_REDIS_ADDR
    password: str = ""
    alias: str = ""
    separator: str = ","
    file: str = ""  # when set, replaces addr/password/alias


@dataclass(frozen=True)
class CloudFoundryConfig:
    enabled: bool = False
    service_tag: str = "redis"


@dataclass(frozen=True)
class AzureConfig:
    enabled: bool = False
    subscription_id: str = ""  # empty = read AZURE_SUBSCRIPTION_ID
    environment: str = ""  # empty = read AZURE_ENVIRONMENT
    credential_type: str = "default"  # "default" or "environment"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "json"  # "json" or "text"


@dataclass(frozen=True)
class AppConfig:
    redis: RedisConfig = field(default_factory=RedisConfig)
    cloud_foundry: CloudFoundryConfig = field(default_factory=CloudFoundryConfig)
    azure: AzureConfig = field(default_factory=AzureConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _coerce_scalar(ft: Any, value: Any, where: str) -> Any:
    """Check a YAML scalar against a str or bool field, converting numbers to strings."""
    if ft is str:
        if value is None:
            return ""
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ConfigError(f"{where} must be a string")
        return str(value)
    if ft is bool and not isinstance(value, bool):
        raise ConfigError(f"{where} must be true or false")
    return value


def _build_nested(cls: type, data: dict[str, Any], prefix: str = "") -> Any:
    """Construct a frozen dataclass, recursively building nested dataclass fields."""
    if not isinstance(data, dict):
        return data
    field_types = {f.name: f.type for f in cls.__dataclass_fields__.values()}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in field_types:
            continue
        where = f"{prefix}{key}"
        ft = field_types[key]
        # Resolve string annotations to actual types in the module scope
        if isinstance(ft, str):
            ft = eval(ft, globals(), {cls.__name__: cls})  # noqa: S307
        if isinstance(ft, type) and hasattr(ft, "__dataclass_fields__"):
            # "redis:" with nothing under it loads as None
            if value is None:
                value = {}
            if not isinstance(value, dict):
                raise ConfigError(f"{where} must be a mapping")
            kwargs[key] = _build_nested(ft, value, prefix=f"{where}.")
        else:
            kwargs[key] = _coerce_scalar(ft, value, where)
    return cls(**kwargs)


def load_config(path: str | Path) -> AppConfig:
    """Load and validate configuration from a YAML file."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Configuration file must be a YAML mapping")

    raw = _walk_and_interpolate(raw)
    config = _build_nested(AppConfig, raw)
    validate(config)
    return config


def with_overrides(config: AppConfig, **sections: dict[str, Any]) -> AppConfig:
    """Return a copy of *config* with non-None values replaced per section.

    ``with_overrides(cfg, redis={"addr": "redis://x:6379", "file": None})``
    keeps ``redis.file`` from *cfg* and replaces ``redis.addr``.
    """
    updates: dict[str, Any] = {}
    for name, values in sections.items():
        current = getattr(config, name)
        changes = {k: v for k, v in values.items() if v is not None}
        if changes:
            updates[name] = replace(current, **changes)
    return replace(config, **updates) if updates else config


def validate(config: AppConfig) -> None:
    """Validate configuration values."""
    if not config.redis.separator:
        raise ConfigError("redis.separator must not be empty")

    if config.azure.credential_type not in ("default", "environment"):
        raise ConfigError("azure.credential_type must be 'default' or 'environment'")

    if config.logging.format not in ("json", "text"):
        raise ConfigError("logging.format must be 'json' or 'text'")

    if not config.cloud_foundry.service_tag:
        raise ConfigError("cloud_foundry.service_tag must not be empty")
