from __future__ import annotations

from dataclasses import dataclass

from brewdesk.clients.cafe_api_sdk.models import BranchRecord, OrderRecord, RedeemOffer


@dataclass(frozen=True)
class BranchView:
    id: str
    name: str
    address: str = ""
    phone: str | None = None
    email: str | None = None
    is_active: bool = True

    @classmethod
    def from_record(cls, record: BranchRecord) -> "BranchView":
        return cls(
            id=str(record.id),
            name=record.name,
            address=record.address,
            phone=record.phone,
            email=record.email,
            is_active=record.is_active,
        )


@dataclass(frozen=True)
class OrderView:
    id: str
    order_number: str
    status: str
    customer_name: str
    total_price: str
    item_count: int
    branch_id: int | None = None
    created_at: str | None = None

    @classmethod
    def from_record(cls, record: OrderRecord) -> "OrderView":
        return cls(
            id=str(record.id),
            order_number=record.order_number or f"#{record.id}",
            status=record.order_status.value,
            customer_name=record.user.full_name,
            total_price=record.total_price,
            item_count=sum(item.quantity for item in record.items),
            branch_id=record.branch,
            created_at=record.created_at,
        )


@dataclass(frozen=True)
class RedeemOfferView:
    id: str
    redeem_points: int
    sub_category_id: int | None
    label: str

    @classmethod
    def from_record(cls, record: RedeemOffer) -> "RedeemOfferView":
        parts = [part for part in (record.category_name, record.sub_category_name) if part]
        return cls(
            id=str(record.id),
            redeem_points=record.redeem_points,
            sub_category_id=record.sub_category,
            label=" / ".join(parts),
        )
