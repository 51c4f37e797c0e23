from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from brewdesk.app.application.catalog_mapping import CatalogIndexes, build_indexes, raw_to_view_model
from brewdesk.app.domain.models.catalog import Category, ProductView, SubCategory
from brewdesk.clients.cafe_api_sdk.models import ProductRecord


@dataclass(frozen=True)
class Catalog:
    categories: tuple[Category, ...]
    subcategories: tuple[SubCategory, ...]
    raw_products: tuple[ProductRecord, ...]
    products: tuple[ProductView, ...]
    generation: int = 0
    stale: bool = False


@dataclass
class CatalogState:
    """Shared catalog collections. ``products`` is always derived, never edited by hand.

    Lists are updated in place so views holding a reference keep seeing the
    current contents.
    """

    categories: list[Category] = field(default_factory=list)
    subcategories: list[SubCategory] = field(default_factory=list)
    raw_products: list[ProductRecord] = field(default_factory=list)
    products: list[ProductView] = field(default_factory=list)
    generation: int = 0

    def indexes(self) -> CatalogIndexes:
        return build_indexes(self.categories, self.subcategories)

    def apply(self, catalog: Catalog) -> None:
        self.categories[:] = catalog.categories
        self.subcategories[:] = catalog.subcategories
        self.raw_products[:] = catalog.raw_products
        self.products[:] = catalog.products
        self.generation = catalog.generation

    def set_categories(self, categories: Iterable[Category]) -> None:
        self.categories[:] = list(categories)
        self.rebuild()

    def set_subcategories(self, subcategories: Iterable[SubCategory]) -> None:
        self.subcategories[:] = list(subcategories)
        self.rebuild()

    def set_raw_products(self, raw_products: Iterable[ProductRecord]) -> None:
        self.raw_products[:] = list(raw_products)
        self.rebuild()

    def rebuild(self) -> None:
        categories_by_id, subcategories_by_id = self.indexes()
        self.products[:] = [raw_to_view_model(raw, categories_by_id, subcategories_by_id) for raw in self.raw_products]
