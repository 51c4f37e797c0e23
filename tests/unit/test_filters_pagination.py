from __future__ import annotations

import pytest

from brewdesk.app.domain.models.catalog import ProductView
from brewdesk.app.ui.filters import FilterState, apply_filters, clean_filters
from brewdesk.app.ui.pagination import (
    PaginationState,
    clamp_page,
    goto_page,
    next_page,
    paginate,
    prev_page,
    total_pages_for,
)

PRODUCTS = [
    ProductView(id="1", name="Latte", description="Milky espresso", sub_category_id=10, is_featured=True),
    ProductView(id="2", name="Americano", description="Long black", sub_category_id=10),
    ProductView(id="3", name="Blueberry Muffin", description="Baked daily", sub_category_id=20, is_featured=True),
    ProductView(id="4", name="Iced Latte", description="", sub_category_id=11),
]


def _ids(products) -> list[str]:
    return [product.id for product in products]


def test_default_filter_keeps_everything_in_order() -> None:
    assert _ids(apply_filters(PRODUCTS, FilterState())) == ["1", "2", "3", "4"]


def test_search_is_case_insensitive_on_name_and_description() -> None:
    assert _ids(apply_filters(PRODUCTS, FilterState(search_text="LATTE"))) == ["1", "4"]
    assert _ids(apply_filters(PRODUCTS, FilterState(search_text="espresso"))) == ["1"]


def test_predicates_are_anded() -> None:
    state = FilterState(search_text="latte", sub_category_id="10", feature_filter="featured")

    assert _ids(apply_filters(PRODUCTS, state)) == ["1"]


def test_regular_filter_excludes_featured() -> None:
    assert _ids(apply_filters(PRODUCTS, FilterState(feature_filter="regular"))) == ["2", "4"]


@pytest.mark.parametrize(
    "state",
    [
        FilterState(),
        FilterState(search_text="a"),
        FilterState(sub_category_id=10),
        FilterState(feature_filter="regular"),
        FilterState(search_text="muffin", feature_filter="featured"),
    ],
)
def test_apply_filters_is_idempotent(state: FilterState) -> None:
    once = apply_filters(PRODUCTS, state)

    assert apply_filters(once, state) == once


def test_unknown_feature_filter_is_rejected() -> None:
    with pytest.raises(ValueError):
        FilterState(feature_filter="popular")


def test_clean_filters_drops_blank_and_all() -> None:
    assert clean_filters({"search": "", "status": "all", "branch": 2, "page": None}) == {"branch": 2}


def test_seven_items_page_size_three() -> None:
    items = list(range(7))
    state = PaginationState(page=1, page_size=3)

    first = paginate(items, state)
    state.page = 3
    last = paginate(items, state)

    assert first.items == [0, 1, 2]
    assert first.total_pages == 3
    assert last.items == [6]
    assert last.has_next is False
    assert last.has_prev is True


@pytest.mark.parametrize("count", [0, 1, 5, 9, 10, 23])
@pytest.mark.parametrize("page_size", [1, 3, 10])
@pytest.mark.parametrize("requested", [-4, 0, 1, 2, 50])
def test_paginate_stays_within_bounds(count: int, page_size: int, requested: int) -> None:
    state = PaginationState(page=requested, page_size=page_size)

    page = paginate(list(range(count)), state)

    assert len(page.items) <= page_size
    assert 1 <= page.page <= page.total_pages
    assert page.total_pages == max(1, -(-count // page_size))


def test_empty_collection_has_one_empty_page() -> None:
    page = paginate([], PaginationState())

    assert page.items == []
    assert page.total_pages == 1
    assert page.page == 1


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        PaginationState(page_size=0)
    with pytest.raises(ValueError):
        total_pages_for(5, -1)


def test_navigation_helpers_respect_bounds() -> None:
    state = PaginationState(page=1, page_size=3)

    prev_page(state)
    assert state.page == 1
    next_page(state, total_pages=2)
    next_page(state, total_pages=2)
    assert state.page == 2
    goto_page(state, 9, total_pages=4)
    assert state.page == 4
    goto_page(state, -3)
    assert state.page == 1
    assert clamp_page(7, 0) == 1
