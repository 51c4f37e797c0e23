from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import NamedTuple

from brewdesk.app.domain.models.catalog import Category, ProductView, SubCategory
from brewdesk.clients.cafe_api_sdk.models import ProductRecord


class CatalogIndexes(NamedTuple):
    categories_by_id: dict[int, Category]
    subcategories_by_id: dict[int, SubCategory]


def build_indexes(categories: Iterable[Category], subcategories: Iterable[SubCategory]) -> CatalogIndexes:
    # later duplicates win, matching the order the API listed them in
    return CatalogIndexes(
        categories_by_id={category.id: category for category in categories},
        subcategories_by_id={subcategory.id: subcategory for subcategory in subcategories},
    )


def raw_to_view_model(
    raw: ProductRecord,
    categories_by_id: Mapping[int, Category],
    subcategories_by_id: Mapping[int, SubCategory],
) -> ProductView:
    """Join one raw product against the category indexes.

    This is the only place a product record becomes a ``ProductView``. It is
    total: a missing subcategory, or a subcategory whose category is missing,
    produces empty labels instead of an error.
    """
    subcategory = subcategories_by_id.get(raw.sub_category) if raw.sub_category is not None else None
    category = categories_by_id.get(subcategory.category_id) if subcategory is not None else None
    return ProductView(
        id=str(raw.id),
        name=raw.name,
        description=raw.description or "",
        price=raw.price,
        sub_category_id=raw.sub_category,
        category_id=subcategory.category_id if subcategory is not None else None,
        category_name=category.name if category is not None else "",
        sub_category_name=subcategory.name if subcategory is not None else "",
        is_featured=raw.is_featured,
        stock=raw.stock,
        cost=raw.cost,
        image_url=raw.image or None,
        image_alt=raw.image_alt_description,
        redeem_points=raw.redeem_points,
        featured_points=raw.featured_points,
        sizes=tuple(size.name for size in raw.size),
        add_ons=tuple(add_on.name for add_on in raw.add_ons),
        created_at=raw.created_at,
        updated_at=raw.updated_at,
    )


def is_dangling(raw: ProductRecord, indexes: CatalogIndexes) -> bool:
    if raw.sub_category is None:
        return False
    subcategory = indexes.subcategories_by_id.get(raw.sub_category)
    return subcategory is None or subcategory.category_id not in indexes.categories_by_id
