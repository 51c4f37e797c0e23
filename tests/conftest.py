from __future__ import annotations

import pytest

from tests.support import Recorder


@pytest.fixture
def navigator() -> Recorder:
    return Recorder()


@pytest.fixture
def notifier() -> Recorder:
    return Recorder()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path) -> None:
    for name in (
        "BREWDESK_API_BASE_URL",
        "BREWDESK_TIMEOUT_SECONDS",
        "BREWDESK_VERIFY_SSL",
        "BREWDESK_PAGE_SIZE",
        "BREWDESK_LOGIN_PATH",
        "BREWDESK_DASHBOARD_PATH",
        "BREWDESK_SESSION_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of from_env() calls
    monkeypatch.chdir(tmp_path)
