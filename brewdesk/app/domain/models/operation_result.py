from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from brewdesk.clients.cafe_api_sdk.errors import ApiError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    ok: bool
    value: T | None = None
    error: ApiError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "OperationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ApiError) -> "OperationResult[T]":
        return cls(ok=False, error=error)

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""
