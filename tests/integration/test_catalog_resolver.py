from __future__ import annotations

import threading

import httpx

from brewdesk.app.application.catalog_resolver import CatalogResolver
from brewdesk.app.application.state.catalog_state import CatalogState
from brewdesk.app.session_guard import SessionGuard
from brewdesk.clients.cafe_api_sdk.errors import ApiError, ErrorKind
from brewdesk.clients.cafe_api_sdk.modules.catalog_client import CatalogClient
from brewdesk.clients.cafe_api_sdk.session_store import MemorySessionStore
from tests.support import Recorder, build_http, category, product, subcategory

CATEGORIES = [category(1, "Coffee"), category(2, "Bakery")]
SUBCATEGORIES = [subcategory(10, "Hot", 1), subcategory(20, "Muffins", 2)]
PRODUCTS = [product(3, "Latte", 10), product(1, "Muffin", 20), product(2, "Ghost", 99)]


def _catalog_api(products=PRODUCTS, failures: dict[str, int] | None = None):
    failures = failures or {}

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path in failures:
            return httpx.Response(failures[path], json={"detail": f"{path} unavailable"})
        if path == "/api/category/":
            return httpx.Response(200, json=CATEGORIES)
        if path == "/api/subcategory/":
            return httpx.Response(200, json={"count": 2, "results": SUBCATEGORIES})
        if path == "/api/products/":
            return httpx.Response(200, json=products)
        return httpx.Response(404)

    return handler


def test_resolve_joins_and_keeps_api_order() -> None:
    state = CatalogState()
    resolver = CatalogResolver(CatalogClient(build_http(_catalog_api())), state)

    result = resolver.resolve_catalog()

    assert result.ok is True
    catalog = result.value
    assert catalog is not None
    assert [view.id for view in catalog.products] == ["3", "1", "2"]
    assert [(view.category_name, view.sub_category_name) for view in catalog.products] == [
        ("Coffee", "Hot"),
        ("Bakery", "Muffins"),
        ("", ""),
    ]
    assert catalog.stale is False
    assert [view.id for view in state.products] == ["3", "1", "2"]
    assert state.generation == catalog.generation == 1


def test_three_fetches_run_concurrently() -> None:
    barrier = threading.Barrier(3, timeout=5)
    inner = _catalog_api()

    def handler(request: httpx.Request) -> httpx.Response:
        # only passes if all three requests are in flight at once
        barrier.wait()
        return inner(request)

    result = CatalogResolver(CatalogClient(build_http(handler))).resolve_catalog()

    assert result.ok is True


def test_any_failed_fetch_fails_the_whole_resolution() -> None:
    state = CatalogState()
    handler = _catalog_api(failures={"/api/subcategory/": 500})
    resolver = CatalogResolver(CatalogClient(build_http(handler)), state)

    result = resolver.resolve_catalog()

    assert result.ok is False
    assert result.error is not None
    assert result.error.kind is ErrorKind.REQUEST_FAILED
    assert result.message == "/api/subcategory/ unavailable"
    assert state.products == []


def test_first_error_follows_collection_order() -> None:
    handler = _catalog_api(failures={"/api/products/": 503, "/api/category/": 500})

    result = CatalogResolver(CatalogClient(build_http(handler))).resolve_catalog()

    assert result.message == "/api/category/ unavailable"


def test_network_failure_surfaces_as_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/products/":
            raise httpx.ReadTimeout("slow", request=request)
        return _catalog_api()(request)

    result = CatalogResolver(CatalogClient(build_http(handler))).resolve_catalog()

    assert result.error is not None and result.error.kind is ErrorKind.NETWORK_ERROR


def test_superseded_resolution_is_flagged_stale_and_not_applied() -> None:
    state = CatalogState()
    calls = {"products": 0}
    holder: dict[str, CatalogResolver] = {}
    nested: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/products/":
            calls["products"] += 1
            if calls["products"] == 1:
                # a newer refresh starts and finishes while this one is in flight
                nested["result"] = holder["resolver"].resolve_catalog()
                return httpx.Response(200, json=[product(1, "Old Latte", 10)])
            return httpx.Response(200, json=[product(1, "New Latte", 10)])
        return _catalog_api()(request)

    resolver = CatalogResolver(CatalogClient(build_http(handler)), state)
    holder["resolver"] = resolver

    outer = resolver.resolve_catalog()

    assert outer.ok is True and outer.value is not None
    assert outer.value.stale is True
    assert outer.value.generation == 1
    assert resolver.latest_generation == 2
    assert [view.name for view in state.products] == ["New Latte"]
    assert state.generation == 2


def test_expired_session_during_resolution_signs_out_once(navigator: Recorder, notifier: Recorder) -> None:
    barrier = threading.Barrier(3, timeout=5)
    clears = {"count": 0}
    hook_threads: list[int] = []

    class CountingStore(MemorySessionStore):
        def clear_token(self) -> None:
            clears["count"] += 1
            super().clear_token()

    def handler(request: httpx.Request) -> httpx.Response:
        # all three requests carry the expired token before any 401 lands
        barrier.wait()
        return httpx.Response(401, json={"detail": "Given token not valid."})

    store = CountingStore(token="expired")
    guard = SessionGuard(store, navigator, notifier)
    assert guard.require("/admin/products") is True

    def on_unauthorized(error: ApiError) -> None:
        hook_threads.append(threading.get_ident())
        guard.handle_unauthorized(error)

    state = CatalogState()
    resolver = CatalogResolver(CatalogClient(build_http(handler, store, on_unauthorized)), state)

    result = resolver.resolve_catalog()

    assert result.ok is False
    assert result.error is not None and result.error.kind is ErrorKind.UNAUTHORIZED
    assert clears["count"] == 1
    assert hook_threads == [threading.get_ident()]
    assert navigator.calls == [("/login",)]
    assert notifier.calls == [("error", "Your session has expired. Please sign in again.")]
    assert store.get_redirect_target() == "/admin/products"
    assert state.products == []
