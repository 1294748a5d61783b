from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://wedding-organizer-backend.vercel.app/api/v1"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class SDKConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    retry_max_attempts: int = 3
    retry_backoff_ms: int = 150

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "SDKConfig":
        load_dotenv(env_file)
        config = cls(
            base_url=_normalize_base_url(os.getenv("JEWEPE_API_URL", DEFAULT_BASE_URL)),
            timeout_seconds=read_float("JEWEPE_TIMEOUT_SECONDS", "30"),
            verify_ssl=parse_bool(os.getenv("JEWEPE_VERIFY_SSL"), default=True),
            retry_max_attempts=read_int("JEWEPE_RETRY_MAX_ATTEMPTS", "3"),
            retry_backoff_ms=read_int("JEWEPE_RETRY_BACKOFF_MS", "150"),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.base_url:
            raise ConfigError("JEWEPE_API_URL cannot be empty")
        if self.timeout_seconds <= 0:
            raise ConfigError(f"Invalid JEWEPE_TIMEOUT_SECONDS: expected > 0, got {self.timeout_seconds}")
        if self.retry_max_attempts < 1:
            raise ConfigError(f"Invalid JEWEPE_RETRY_MAX_ATTEMPTS: expected >= 1, got {self.retry_max_attempts}")
        if self.retry_backoff_ms < 0:
            raise ConfigError(f"Invalid JEWEPE_RETRY_BACKOFF_MS: expected >= 0, got {self.retry_backoff_ms}")


def _normalize_base_url(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        return DEFAULT_BASE_URL
    return normalized.rstrip("/")


def parse_bool(value: str | bool | None, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default

    normalized = str(value).strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc
