from __future__ import annotations

from dataclasses import dataclass, field

from brewdesk.clients.cafe_api_sdk.models import CategoryRecord, SubCategoryRecord


@dataclass(frozen=True)
class Category:
    id: int
    name: str

    @classmethod
    def from_record(cls, record: CategoryRecord) -> "Category":
        return cls(id=record.id, name=record.name)


@dataclass(frozen=True)
class SubCategory:
    id: int
    name: str
    category_id: int

    @classmethod
    def from_record(cls, record: SubCategoryRecord) -> "SubCategory":
        return cls(id=record.id, name=record.name, category_id=record.category)


@dataclass(frozen=True)
class ProductView:
    """A product joined against its subcategory and category.

    ``id`` is the API identifier rendered as text. The two ``*_name`` labels
    are computed at resolution time and are empty when the reference dangles.
    """

    id: str
    name: str
    description: str = ""
    price: float = 0.0
    sub_category_id: int | None = None
    category_id: int | None = None
    category_name: str = ""
    sub_category_name: str = ""
    is_featured: bool = False
    stock: int = 0
    cost: float = 0.0
    image_url: str | None = None
    image_alt: str | None = None
    redeem_points: int = 0
    featured_points: int = 0
    sizes: tuple[str, ...] = field(default_factory=tuple)
    add_ons: tuple[str, ...] = field(default_factory=tuple)
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def labels_resolved(self) -> bool:
        return bool(self.category_name and self.sub_category_name)
