from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from brewdesk.app.domain.models.catalog import ProductView
from brewdesk.app.ui.filters import FilterState, apply_filters
from brewdesk.app.ui.pagination import (
    Page,
    PaginationState,
    goto_page,
    next_page,
    paginate,
    prev_page,
    total_pages_for,
)


class ProductListing:
    """Filter plus page state over the resolved products.

    The page goes back to 1 whenever the filter inputs change or the filtered
    count changes; otherwise it is only clamped into range.
    """

    def __init__(self, products: Iterable[ProductView] = (), page_size: int = 10) -> None:
        self.filters = FilterState()
        self.pagination = PaginationState(page_size=page_size)
        self._products: list[ProductView] = list(products)
        self._filtered: list[ProductView] = apply_filters(self._products, self.filters)

    @property
    def filtered(self) -> list[ProductView]:
        return list(self._filtered)

    @property
    def total_pages(self) -> int:
        return total_pages_for(len(self._filtered), self.pagination.page_size)

    def set_products(self, products: Iterable[ProductView]) -> None:
        self._products = list(products)
        self._refilter(filters_changed=False)

    def set_filters(self, filter_state: FilterState) -> None:
        changed = filter_state != self.filters
        self.filters = filter_state
        self._refilter(filters_changed=changed)

    def update_filters(self, **changes: Any) -> None:
        self.set_filters(replace(self.filters, **changes))

    def visible_page(self) -> Page[ProductView]:
        return paginate(self._filtered, self.pagination)

    def next_page(self) -> Page[ProductView]:
        next_page(self.pagination, self.total_pages)
        return self.visible_page()

    def prev_page(self) -> Page[ProductView]:
        prev_page(self.pagination)
        return self.visible_page()

    def goto_page(self, page: int) -> Page[ProductView]:
        goto_page(self.pagination, page, self.total_pages)
        return self.visible_page()

    def _refilter(self, filters_changed: bool) -> None:
        filtered = apply_filters(self._products, self.filters)
        if filters_changed or len(filtered) != len(self._filtered):
            self.pagination.page = 1
        self._filtered = filtered
        goto_page(self.pagination, self.pagination.page, self.total_pages)
