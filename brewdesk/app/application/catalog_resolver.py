from __future__ import annotations

import itertools
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from brewdesk.app.application.catalog_mapping import build_indexes, is_dangling, raw_to_view_model
from brewdesk.app.application.state.catalog_state import Catalog, CatalogState
from brewdesk.app.domain.models.catalog import Category, SubCategory
from brewdesk.app.domain.models.operation_result import OperationResult
from brewdesk.app.infrastructure.logging.logger import get_logger, log_action
from brewdesk.clients.cafe_api_sdk.errors import ApiError
from brewdesk.clients.cafe_api_sdk.modules.catalog_client import CatalogClient

logger = get_logger(__name__)


class CatalogResolver:
    """Fetch the three catalog collections together and join them.

    Every call to :meth:`resolve_catalog` takes a new generation number. Only
    the result of the most recently issued generation is written to the shared
    ``CatalogState``; earlier ones come back flagged ``stale``.
    """

    def __init__(self, catalog_client: CatalogClient, state: CatalogState | None = None) -> None:
        self.catalog_client = catalog_client
        self.state = state if state is not None else CatalogState()
        self._generations = itertools.count(1)
        self._latest_generation = 0
        self._lock = threading.Lock()

    @property
    def latest_generation(self) -> int:
        return self._latest_generation

    def resolve_catalog(self) -> OperationResult[Catalog]:
        with self._lock:
            generation = next(self._generations)
            self._latest_generation = generation

        fetches: tuple[Callable[[], list[Any]], ...] = (
            self.catalog_client.list_categories,
            self.catalog_client.list_subcategories,
            self.catalog_client.list_products,
        )
        # an expired session fails all three fetches; the 401 hook runs once, here
        with self.catalog_client.http.hold_unauthorized():
            with ThreadPoolExecutor(max_workers=3, thread_name_prefix="catalog") as pool:
                futures = [pool.submit(fetch) for fetch in fetches]
        # leaving the pool joins all three, so every future has settled here

        error = _first_error(futures)
        if error is not None:
            log_action(logger, "catalog", "resolve", "failure", generation=generation, kind=error.kind.value)
            return OperationResult.failure(error)

        category_records, subcategory_records, product_records = (future.result() for future in futures)
        categories = tuple(Category.from_record(record) for record in category_records)
        subcategories = tuple(SubCategory.from_record(record) for record in subcategory_records)
        indexes = build_indexes(categories, subcategories)
        products = tuple(raw_to_view_model(raw, *indexes) for raw in product_records)
        dangling = sum(1 for raw in product_records if is_dangling(raw, indexes))

        with self._lock:
            stale = generation != self._latest_generation
            catalog = Catalog(
                categories=categories,
                subcategories=subcategories,
                raw_products=tuple(product_records),
                products=products,
                generation=generation,
                stale=stale,
            )
            if not stale:
                self.state.apply(catalog)

        log_action(
            logger,
            "catalog",
            "resolve",
            "stale" if stale else "success",
            generation=generation,
            products=len(products),
            dangling=dangling,
        )
        return OperationResult.success(catalog)


def _first_error(futures: list[Future]) -> ApiError | None:
    for future in futures:
        exc = future.exception()
        if exc is None:
            continue
        if isinstance(exc, ApiError):
            return exc
        raise exc
    return None
