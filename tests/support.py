from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from brewdesk.clients.cafe_api_sdk.config import SDKConfig
from brewdesk.clients.cafe_api_sdk.http_client import HttpClient
from brewdesk.clients.cafe_api_sdk.session_store import MemorySessionStore

BASE_URL = "https://cafe.example.test/"

Handler = Callable[[httpx.Request], httpx.Response]


def build_http(
    handler: Handler,
    session_store: MemorySessionStore | None = None,
    on_unauthorized: Callable[..., None] | None = None,
) -> HttpClient:
    return HttpClient(
        config=SDKConfig(base_url=BASE_URL, timeout_seconds=2.0),
        session_store=session_store if session_store is not None else MemorySessionStore(),
        client=httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler)),
        on_unauthorized=on_unauthorized,
    )


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def last(self) -> tuple[Any, ...] | None:
        return self.calls[-1] if self.calls else None


def category(id: int, name: str) -> dict[str, Any]:
    return {"id": id, "name": name}


def subcategory(id: int, name: str, category_id: int) -> dict[str, Any]:
    return {"id": id, "name": name, "category": category_id}


def product(id: int, name: str, sub_category: int | None = 10, **extra: Any) -> dict[str, Any]:
    return {"id": id, "name": name, "price": 120.0, "sub_category": sub_category, **extra}
