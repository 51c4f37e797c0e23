from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from brewdesk.app.domain.models.catalog import ProductView

ALL = "all"
FEATURE_FILTERS = (ALL, "featured", "regular")


@dataclass(frozen=True)
class FilterState:
    search_text: str = ""
    sub_category_id: int | str = ALL
    feature_filter: str = ALL

    def __post_init__(self) -> None:
        if self.feature_filter not in FEATURE_FILTERS:
            raise ValueError(f"feature_filter must be one of {FEATURE_FILTERS}, got {self.feature_filter!r}")


def apply_filters(products: Iterable[ProductView], filter_state: FilterState) -> list[ProductView]:
    needle = filter_state.search_text.strip().lower()
    return [
        product
        for product in products
        if _matches_search(product, needle)
        and _matches_sub_category(product, filter_state.sub_category_id)
        and _matches_feature(product, filter_state.feature_filter)
    ]


def _matches_search(product: ProductView, needle: str) -> bool:
    if not needle:
        return True
    return needle in product.name.lower() or needle in product.description.lower()


def _matches_sub_category(product: ProductView, sub_category_id: int | str) -> bool:
    if sub_category_id == ALL:
        return True
    # select widgets hand over text, the catalog holds integers
    return str(product.sub_category_id) == str(sub_category_id)


def _matches_feature(product: ProductView, feature_filter: str) -> bool:
    if feature_filter == "featured":
        return product.is_featured
    if feature_filter == "regular":
        return not product.is_featured
    return True


def clean_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value not in (None, "", ALL)}
