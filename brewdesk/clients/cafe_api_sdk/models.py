from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class UserProfile(BaseModel):
    id: int
    full_name: str = ""
    email: str | None = None
    phone_number: str = ""
    profile_picture: str | None = None
    redeem_points: int = 0


class LoginResponse(BaseModel):
    detail: str = ""
    user: Optional[UserProfile] = None
    otp_required: bool | None = None


class VerifyOtpResponse(BaseModel):
    token: str | None = None
    access: str | None = None
    user: Optional[UserProfile] = None

    def resolved_token(self) -> str | None:
        return self.token or self.access or None


class CategoryRecord(BaseModel):
    id: int
    name: str
    description: str | None = None
    status: str | None = None
    product_count: int | None = None


class SubCategoryRecord(BaseModel):
    id: int
    name: str
    category: int


class ProductSize(BaseModel):
    id: int
    name: str


class ProductAddOn(BaseModel):
    id: int
    name: str
    price: float = 0.0


class ProductRecord(BaseModel):
    id: int
    name: str
    price: float = 0.0
    description: str | None = ""
    image: str | None = None
    image_alt_description: str | None = None
    size: List[ProductSize] = Field(default_factory=list)
    sub_category: int | None = None
    redeem_points: int = 0
    is_featured: bool = False
    featured_points: int = 0
    add_ons: List[ProductAddOn] = Field(default_factory=list)
    stock: int = 0
    cost: float = 0.0
    created_at: str | None = None
    updated_at: str | None = None


class BranchRecord(BaseModel):
    id: int
    name: str
    address: str = ""
    latitude: str | None = None
    longitude: str | None = None
    phone: str | None = None
    email: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderProduct(BaseModel):
    id: int = 0
    name: str = "Unknown Product"
    description: str | None = ""
    price: float = 0.0
    image: str | None = None


class OrderCustomer(BaseModel):
    id: int = 0
    full_name: str = "Unknown Customer"
    email: str | None = ""
    phone_number: str = "N/A"


class OrderItem(BaseModel):
    id: int | None = None
    product: OrderProduct = Field(default_factory=OrderProduct)
    quantity: int = 1
    price: str = "0.00"

    @field_validator("product", mode="before")
    @classmethod
    def _expand_product_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return {"id": value, "name": f"Product #{value}"}
        return value or {}

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_text(cls, value: Any) -> Any:
        return "0.00" if value in (None, "") else str(value)


class OrderRecord(BaseModel):
    id: int
    order_number: str | None = None
    order_status: OrderStatus = OrderStatus.PENDING
    order_type: str = "standard"
    total_price: str = "0.00"
    discount: str = "0.00"
    branch: int | None = None
    user: OrderCustomer = Field(default_factory=OrderCustomer)
    items: List[OrderItem] = Field(default_factory=list)
    notes: str = ""
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("branch", mode="before")
    @classmethod
    def _branch_id(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value.get("id")
        return value

    @field_validator("total_price", "discount", mode="before")
    @classmethod
    def _money_as_text(cls, value: Any) -> Any:
        return "0.00" if value in (None, "") else str(value)

    @field_validator("user", mode="before")
    @classmethod
    def _customer_or_default(cls, value: Any) -> Any:
        return value or {}


class OrderPage(BaseModel):
    orders: List[OrderRecord] = Field(default_factory=list)
    count: int = 0
    next: str | None = None
    previous: str | None = None


class FavoriteRecord(BaseModel):
    id: int
    user: int | None = None
    product: int
    created_at: str | None = None
    updated_at: str | None = None


class RedeemOffer(BaseModel):
    id: int
    redeem_points: int = 0
    sub_category: int | None = None
    sub_category_name: str = ""
    category_id: int | None = None
    category_name: str = ""
    created_at: str | None = None
    updated_at: str | None = None


class UserRedeem(BaseModel):
    id: int
    redeem: RedeemOffer
    points_used: int = 0
    user_full_name: str = ""
    user_email: str | None = None
    user_phone: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("redeem", mode="before")
    @classmethod
    def _expand_offer_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return {"id": value}
        return value
