from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://localhost:8000/"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class SDKConfig:
    base_url: str
    timeout_seconds: float = 15.0
    verify_ssl: bool = True

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "SDKConfig":
        """Load SDK settings from the environment with optional .env override."""
        load_dotenv(env_file)
        base_url = _normalize_base_url(os.getenv("BREWDESK_API_BASE_URL", DEFAULT_BASE_URL))
        timeout_seconds = read_float("BREWDESK_TIMEOUT_SECONDS", "15")
        if timeout_seconds <= 0:
            raise ConfigError(f"Invalid BREWDESK_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}")
        verify_ssl = parse_bool(os.getenv("BREWDESK_VERIFY_SSL"), default=True)
        return cls(base_url=base_url, timeout_seconds=timeout_seconds, verify_ssl=verify_ssl)


def _normalize_base_url(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        return DEFAULT_BASE_URL
    return normalized if normalized.endswith("/") else f"{normalized}/"


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
