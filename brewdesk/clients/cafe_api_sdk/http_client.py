from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import httpx

from brewdesk.clients.cafe_api_sdk.config import SDKConfig
from brewdesk.clients.cafe_api_sdk.errors import ApiError, ErrorKind
from brewdesk.clients.cafe_api_sdk.session_store import MemorySessionStore, SessionStore

logger = logging.getLogger(__name__)


class _NoContent:
    def __repr__(self) -> str:
        return "NO_CONTENT"

    def __bool__(self) -> bool:
        return False


NO_CONTENT = _NoContent()

JsonPayload = dict[str, Any] | list[Any]


class HttpClient:
    def __init__(
        self,
        config: SDKConfig | None = None,
        session_store: SessionStore | None = None,
        client: httpx.Client | None = None,
        on_unauthorized: Callable[[ApiError], None] | None = None,
    ) -> None:
        self.config = config or SDKConfig.from_env()
        self.session_store = session_store or MemorySessionStore()
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
        )
        self._unauthorized_handler = on_unauthorized
        self._auth_lock = threading.Lock()
        self._held = 0
        self._held_error: ApiError | None = None

    def register_unauthorized_handler(self, handler: Callable[[ApiError], None] | None) -> None:
        self._unauthorized_handler = handler

    def close(self) -> None:
        self._client.close()

    @contextmanager
    def hold_unauthorized(self) -> Iterator[None]:
        """Defer the unauthorized hook until the block exits.

        Requests fanned out to worker threads inside the block still drop the
        expired token right away, but the hook runs once, on the thread that
        opened the block.
        """
        with self._auth_lock:
            self._held += 1
        try:
            yield
        finally:
            with self._auth_lock:
                self._held -= 1
                pending = self._held_error if self._held == 0 else None
                if self._held == 0:
                    self._held_error = None
            if pending is not None and self._unauthorized_handler is not None:
                self._unauthorized_handler(pending)

    def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        files: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> JsonPayload | _NoContent:
        request_headers = {"Accept": "application/json", **dict(headers or {})}
        token = self.session_store.get_token()
        if token:
            request_headers["Authorization"] = f"Bearer {token}"

        normalized_method = method.upper()
        normalized_path = path.lstrip("/")
        multipart = files is not None or data is not None
        request_kwargs: dict[str, Any] = {"headers": request_headers, "params": params}
        if multipart:
            request_kwargs["files"] = files
            request_kwargs["data"] = data
        elif json_body is not None:
            request_kwargs["json"] = json_body

        logger.debug("request %s /%s", normalized_method, normalized_path)
        try:
            response = self._client.request(normalized_method, normalized_path, **request_kwargs)
        except httpx.TransportError as exc:
            logger.warning("network failure on %s /%s: %s", normalized_method, normalized_path, type(exc).__name__)
            raise ApiError(
                kind=ErrorKind.NETWORK_ERROR,
                message="Network error. Please try again.",
                code="NETWORK_ERROR",
                details=str(exc),
            ) from exc

        if response.is_success:
            return self._parse_success(response)

        error = ApiError.from_http_response(response)
        logger.warning(
            "request %s /%s failed status=%s kind=%s",
            normalized_method,
            normalized_path,
            response.status_code,
            error.kind.value,
        )
        if error.kind is ErrorKind.UNAUTHORIZED:
            self._handle_unauthorized(error, token or None)
        raise error

    def _handle_unauthorized(self, error: ApiError, sent_token: str | None) -> None:
        with self._auth_lock:
            if sent_token is not None:
                if self.session_store.get_token() != sent_token:
                    # the session changed after this request went out
                    return
                self.session_store.clear_token()
            if self._held:
                if self._held_error is None:
                    self._held_error = error
                return
        if self._unauthorized_handler is not None:
            self._unauthorized_handler(error)

    @staticmethod
    def _parse_success(response: httpx.Response) -> JsonPayload | _NoContent:
        if not response.content or response.status_code == 204:
            return NO_CONTENT
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                kind=ErrorKind.PROTOCOL_ERROR,
                message="Server returned a response that is not valid JSON.",
                code="INVALID_JSON",
                status_code=response.status_code,
            ) from exc
