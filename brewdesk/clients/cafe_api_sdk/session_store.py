from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from platformdirs import user_data_dir

TOKEN_KEY = "auth_token"
REDIRECT_KEY = "redirect_after_login"


class SessionStore(Protocol):
    def get_token(self) -> str | None: ...

    def set_token(self, token: str) -> None: ...

    def clear_token(self) -> None: ...

    def is_authenticated(self) -> bool: ...

    def get_redirect_target(self) -> str | None: ...

    def set_redirect_target(self, path: str) -> None: ...

    def clear_redirect_target(self) -> None: ...


@dataclass
class MemorySessionStore:
    token: str | None = None
    redirect_target: str | None = None

    def get_token(self) -> str | None:
        return self.token or None

    def set_token(self, token: str) -> None:
        self.token = token

    def clear_token(self) -> None:
        self.token = None

    def is_authenticated(self) -> bool:
        return bool(self.get_token())

    def get_redirect_target(self) -> str | None:
        return self.redirect_target

    def set_redirect_target(self, path: str) -> None:
        self.redirect_target = path

    def clear_redirect_target(self) -> None:
        self.redirect_target = None


@dataclass
class FileSessionStore:
    """Bearer token and post-login redirect persisted as one file per key."""

    app_name: str = "brewdesk"
    base_dir: Path | None = None
    _resolved_dir: Path | None = field(default=None, init=False, repr=False)

    def _dir(self) -> Path:
        if self._resolved_dir is None:
            base = self.base_dir or Path(user_data_dir(self.app_name, "Brewdesk"))
            base.mkdir(parents=True, exist_ok=True)
            self._resolved_dir = base
        return self._resolved_dir

    def _path(self, key: str) -> Path:
        return self._dir() / f"{key}.json"

    def _read(self, key: str) -> str | None:
        try:
            path = self._path(key)
            if not path.exists():
                return None
            data = json.loads(path.read_text(encoding="utf-8"))
        except ValueError:
            self._remove(key)
            return None
        except OSError:
            return None
        value = data.get("value") if isinstance(data, dict) else None
        return value if isinstance(value, str) and value else None

    def _write(self, key: str, value: str) -> None:
        path = self._path(key)
        path.write_text(json.dumps({"value": value}), encoding="utf-8")
        try:
            path.chmod(0o600)
        except OSError:
            pass

    def _remove(self, key: str) -> None:
        try:
            path = self._path(key)
            if path.exists():
                path.unlink()
        except OSError:
            pass

    def get_token(self) -> str | None:
        return self._read(TOKEN_KEY)

    def set_token(self, token: str) -> None:
        self._write(TOKEN_KEY, token)

    def clear_token(self) -> None:
        self._remove(TOKEN_KEY)

    def is_authenticated(self) -> bool:
        return bool(self.get_token())

    def get_redirect_target(self) -> str | None:
        return self._read(REDIRECT_KEY)

    def set_redirect_target(self, path: str) -> None:
        self._write(REDIRECT_KEY, path)

    def clear_redirect_target(self) -> None:
        self._remove(REDIRECT_KEY)
