from __future__ import annotations

from brewdesk.app.infrastructure.logging.logger import get_logger, log_action
from brewdesk.app.ports import Navigator, Notifier, notify_quietly
from brewdesk.clients.cafe_api_sdk.errors import ApiError
from brewdesk.clients.cafe_api_sdk.session_store import SessionStore

logger = get_logger(__name__)


class SessionGuard:
    def __init__(
        self,
        session_store: SessionStore,
        navigator: Navigator,
        notifier: Notifier | None = None,
        login_path: str = "/login",
    ) -> None:
        self.session_store = session_store
        self.navigator = navigator
        self.notifier = notifier or notify_quietly
        self.login_path = login_path
        self.current_path: str | None = None

    def require(self, path: str) -> bool:
        self.current_path = path
        if self.session_store.is_authenticated():
            return True
        self._redirect_to_login(path)
        return False

    def handle_unauthorized(self, error: ApiError) -> None:
        # the HTTP client has already dropped the token
        log_action(logger, "session", "unauthorized", "failure", code=error.code)
        self.notifier("error", "Your session has expired. Please sign in again.")
        self._redirect_to_login(self.current_path)

    def _redirect_to_login(self, path: str | None) -> None:
        if path and path != self.login_path:
            self.session_store.set_redirect_target(path)
        self.navigator(self.login_path)
