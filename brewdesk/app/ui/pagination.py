from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = 10

    def __post_init__(self) -> None:
        _check_page_size(self.page_size)


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total_items: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def total_pages_for(count: int, page_size: int) -> int:
    _check_page_size(page_size)
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(1, page), max(1, total_pages))


def paginate(items: Sequence[T], state: PaginationState) -> Page[T]:
    total_pages = total_pages_for(len(items), state.page_size)
    state.page = clamp_page(state.page, total_pages)
    start = (state.page - 1) * state.page_size
    return Page(
        items=list(items[start : start + state.page_size]),
        page=state.page,
        total_pages=total_pages,
        total_items=len(items),
    )


def next_page(state: PaginationState, total_pages: int | None = None) -> PaginationState:
    if total_pages is not None and state.page >= total_pages:
        return state
    state.page += 1
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page = max(1, state.page - 1)
    return state


def goto_page(state: PaginationState, page: int, total_pages: int | None = None) -> PaginationState:
    state.page = clamp_page(page, total_pages) if total_pages is not None else max(1, page)
    return state


def _check_page_size(page_size: int) -> None:
    if page_size <= 0:
        raise ValueError(f"page_size must be > 0, got {page_size}")
