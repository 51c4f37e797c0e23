from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from brewdesk.clients.cafe_api_sdk.config import ConfigError, SDKConfig, read_int

DEFAULT_PAGE_SIZE = 10
DEFAULT_LOGIN_PATH = "/login"
DEFAULT_DASHBOARD_PATH = "/admin"


@dataclass(frozen=True)
class AppConfig:
    sdk: SDKConfig
    page_size: int = DEFAULT_PAGE_SIZE
    login_path: str = DEFAULT_LOGIN_PATH
    dashboard_path: str = DEFAULT_DASHBOARD_PATH
    session_dir: Path | None = None

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "AppConfig":
        load_dotenv(env_file)
        session_dir = os.getenv("BREWDESK_SESSION_DIR", "").strip()
        config = cls(
            sdk=SDKConfig.from_env(env_file),
            page_size=read_int("BREWDESK_PAGE_SIZE", str(DEFAULT_PAGE_SIZE)),
            login_path=os.getenv("BREWDESK_LOGIN_PATH", DEFAULT_LOGIN_PATH).strip(),
            dashboard_path=os.getenv("BREWDESK_DASHBOARD_PATH", DEFAULT_DASHBOARD_PATH).strip(),
            session_dir=Path(session_dir).expanduser() if session_dir else None,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.page_size <= 0:
            raise ConfigError(f"Invalid BREWDESK_PAGE_SIZE: expected > 0, got {self.page_size}")
        if not self.login_path.startswith("/"):
            raise ConfigError(f"Invalid BREWDESK_LOGIN_PATH: expected an absolute path, got {self.login_path!r}")
        if not self.dashboard_path.startswith("/"):
            raise ConfigError(
                f"Invalid BREWDESK_DASHBOARD_PATH: expected an absolute path, got {self.dashboard_path!r}"
            )
