from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    REQUEST_FAILED = "request_failed"
    NETWORK_ERROR = "network_error"
    PROTOCOL_ERROR = "protocol_error"
    MAPPING_ERROR = "mapping_error"


@dataclass
class ApiError(Exception):
    kind: ErrorKind
    message: str
    code: str = "HTTP_ERROR"
    status_code: int | None = None
    details: dict[str, Any] | list[Any] | str | None = None

    def __str__(self) -> str:
        status = f" (HTTP {self.status_code})" if self.status_code else ""
        return f"{self.code}: {self.message}{status}"

    @property
    def retryable(self) -> bool:
        return self.kind in {ErrorKind.NETWORK_ERROR, ErrorKind.REQUEST_FAILED}

    @classmethod
    def validation(cls, message: str, code: str = "VALIDATION_ERROR", details: Any = None) -> "ApiError":
        return cls(kind=ErrorKind.VALIDATION, message=message, code=code, details=details)

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        payload = _safe_json(response)
        message = extract_error_message(payload) or response.reason_phrase or "Request failed"
        if response.status_code == 401:
            return cls(
                kind=ErrorKind.UNAUTHORIZED,
                message=message,
                code="UNAUTHORIZED",
                status_code=401,
                details=payload,
            )
        return cls(
            kind=ErrorKind.REQUEST_FAILED,
            message=message,
            code=str(payload.get("code") or "HTTP_ERROR") if isinstance(payload, dict) else "HTTP_ERROR",
            status_code=response.status_code,
            details=payload,
        )


def extract_error_message(payload: Any) -> str | None:
    """Flatten a DRF-style error body into one line.

    Handles ``{"detail": "..."}``, ``{"message": "..."}`` and field-keyed
    validation errors such as ``{"phone_number": ["Already taken."]}``.
    """
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, list):
        parts = [extract_error_message(item) for item in payload]
        joined = " ".join(part for part in parts if part)
        return joined or None
    if not isinstance(payload, dict) or not payload:
        return None

    for key in ("detail", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()

    parts: list[str] = []
    for value in payload.values():
        text = extract_error_message(value)
        if text:
            parts.append(text)
    return " ".join(parts) or None


def _safe_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
