"""Configuration models and enums for prlens.

Single source of truth for provider credentials, diff limits, and defaults.
Values resolve as CLI override > environment > optional TOML file > default.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from prlens.diff.filters import parse_ignore_patterns
from prlens.errors import SettingsError


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


DEFAULT_MAX_DIFF_CHARS = 120_000
DEFAULT_MODEL_TEMPERATURE = 0.3
DEFAULT_AZURE_API_VERSION = "2024-10-21"


class Settings(BaseModel):
    """Resolved prlens settings."""

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    model_provider: str | None = None

    openai_api_key: str | None = None
    openai_model: str | None = None
    openai_base_url: str | None = None

    azure_api_key: str | None = None
    azure_openai_resource: str | None = None
    azure_openai_deployment: str | None = None
    azure_api_version: str = DEFAULT_AZURE_API_VERSION

    anthropic_api_key: str | None = None
    anthropic_model: str | None = None

    google_api_key: str | None = None
    google_model: str | None = None

    max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS
    ignore_patterns: tuple[str, ...] = Field(default_factory=tuple)
    model_temperature: float = DEFAULT_MODEL_TEMPERATURE
    jira_branch_regex: str | None = None
    log_level: LogLevel = LogLevel.INFO

    @field_validator(
        "model_provider",
        "openai_api_key",
        "openai_model",
        "openai_base_url",
        "azure_api_key",
        "azure_openai_resource",
        "azure_openai_deployment",
        "anthropic_api_key",
        "anthropic_model",
        "google_api_key",
        "google_model",
        "jira_branch_regex",
    )
    @classmethod
    def _strip_optional(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped if stripped else None

    @field_validator("model_provider")
    @classmethod
    def _lower_provider(cls, value: str | None) -> str | None:
        return value.lower() if value else value

    @field_validator("max_diff_chars")
    @classmethod
    def _validate_max_diff_chars(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_diff_chars cannot be negative")
        return value

    @field_validator("model_temperature")
    @classmethod
    def _validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError("model_temperature must be between 0 and 2")
        return value

    @field_validator("ignore_patterns", mode="before")
    @classmethod
    def _split_patterns(cls, value: Any) -> Any:
        if value is None or isinstance(value, str | list | tuple):
            return parse_ignore_patterns(value)
        return value

    def masked_dump(self) -> dict[str, Any]:
        """Settings as a JSON-ready dict with API keys masked."""

        data = self.model_dump(mode="json")
        for key in _SECRET_FIELDS:
            if data.get(key):
                data[key] = "***"
        return data


_SECRET_FIELDS = ("openai_api_key", "azure_api_key", "anthropic_api_key", "google_api_key")

# setting name -> (environment variable, toml section, toml key)
_SOURCES: dict[str, tuple[str, str, str]] = {
    "model_provider": ("MODEL_PROVIDER", "provider", "name"),
    "openai_api_key": ("OPENAI_API_KEY", "openai", "api_key"),
    "openai_model": ("OPENAI_MODEL", "openai", "model"),
    "openai_base_url": ("OPENAI_BASE_URL", "openai", "base_url"),
    "azure_api_key": ("AZURE_API_KEY", "azure", "api_key"),
    "azure_openai_resource": ("AZURE_OPENAI_RESOURCE", "azure", "resource"),
    "azure_openai_deployment": ("AZURE_OPENAI_DEPLOYMENT", "azure", "deployment"),
    "azure_api_version": ("AZURE_API_VERSION", "azure", "api_version"),
    "anthropic_api_key": ("ANTHROPIC_API_KEY", "anthropic", "api_key"),
    "anthropic_model": ("ANTHROPIC_MODEL", "anthropic", "model"),
    "google_api_key": ("GOOGLE_API_KEY", "google", "api_key"),
    "google_model": ("GOOGLE_MODEL", "google", "model"),
    "max_diff_chars": ("MAX_DIFF_CHARS", "limits", "max_diff_chars"),
    "ignore_patterns": ("IGNORE_PATTERNS", "limits", "ignore_patterns"),
    "model_temperature": ("MODEL_TEMPERATURE", "model", "temperature"),
    "jira_branch_regex": ("JIRA_BRANCH_REGEX", "jira", "branch_regex"),
    "log_level": ("PR_AGENT_LOG_LEVEL", "logging", "log_level"),
}


def load_settings(
    cli_overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
    config_path: Path | str | None = None,
) -> Settings:
    env = os.environ if env is None else env
    cli_overrides = cli_overrides or {}

    config_data: dict[str, Any] = {}
    if config_path:
        path = Path(config_path)
        if path.exists():
            config_data = _read_toml(path)

    raw: dict[str, Any] = {}
    for name, (env_key, section, key) in _SOURCES.items():
        raw[name] = _first_value(
            _clean_str(cli_overrides.get(name)),
            _clean_str(env.get(env_key)),
            _clean_str(_get_config_value(config_data, section, key)),
        )

    defaults = Settings()

    max_diff_chars = _coerce_int(raw.pop("max_diff_chars"), defaults.max_diff_chars)
    model_temperature = _coerce_float(raw.pop("model_temperature"), defaults.model_temperature)
    log_level_enum = _coerce_enum(raw.pop("log_level"), LogLevel, defaults.log_level)
    log_level_val = cast(LogLevel, log_level_enum or LogLevel.INFO)
    azure_api_version = raw.pop("azure_api_version") or defaults.azure_api_version

    try:
        return Settings(
            **raw,
            azure_api_version=azure_api_version,
            max_diff_chars=max_diff_chars,
            model_temperature=model_temperature,
            log_level=log_level_val,
        )
    except ValidationError as exc:
        raise SettingsError(f"invalid settings: {_describe_errors(exc)}") from exc


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise SettingsError(f"cannot read config file {path}: {exc.strerror or exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"config file {path} is not valid TOML: {exc}") from exc


def _describe_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


def _get_config_value(config: Mapping[str, Any], section: str, key: str) -> Any:
    section_data = config.get(section)
    if not isinstance(section_data, dict):
        return None
    return section_data.get(key)


def _clean_str(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    return value


def _first_value(*candidates: Any) -> Any:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.replace("_", ""))
        except ValueError:
            return default
    return default


def _coerce_float(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def _coerce_enum(value: Any, enum_cls: type[Enum], default: Enum | None = None) -> Enum | None:
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.lower())
        except ValueError:
            return default
    return default


__all__ = [
    "Settings",
    "LogLevel",
    "DEFAULT_MAX_DIFF_CHARS",
    "DEFAULT_MODEL_TEMPERATURE",
    "DEFAULT_AZURE_API_VERSION",
    "load_settings",
]
