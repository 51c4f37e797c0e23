from __future__ import annotations

from typing import Any, Mapping

from brewdesk.clients.cafe_api_sdk.errors import ApiError
from brewdesk.clients.cafe_api_sdk.models import OrderPage, OrderRecord, OrderStatus
from brewdesk.clients.cafe_api_sdk.modules.base import BaseClient, build_query_params, parse_model
from brewdesk.clients.cafe_api_sdk.normalizers import normalize_listing


class OrdersClient(BaseClient):
    def list_orders(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: str | None = None,
        branch: int | None = None,
    ) -> OrderPage:
        params = build_query_params(
            page=page,
            page_size=page_size,
            search=search,
            status=None if status == "all" else status,
            branch=branch,
        )
        payload = self._request("GET", "/api/orders/", params=params or None)
        listing = normalize_listing(payload)
        return OrderPage(
            orders=[parse_model(OrderRecord, row) for row in listing["rows"]],
            count=listing["count"],
            next=listing["next"],
            previous=listing["previous"],
        )

    def get_order(self, order_id: int | str) -> OrderRecord:
        return parse_model(OrderRecord, self._object("GET", f"/api/orders/{order_id}/"))

    def create_order(self, payload: Mapping[str, Any]) -> OrderRecord:
        data = self._object("POST", "/api/orders/", json_body=dict(payload))
        return parse_model(OrderRecord, data)

    def update_status(self, order_id: int | str, status: str) -> OrderRecord:
        resolved = parse_order_status(status)
        data = self._object(
            "PATCH",
            f"/api/orders/{order_id}/status/",
            json_body={"order_status": resolved.value},
        )
        return parse_model(OrderRecord, data)

    def delete_order(self, order_id: int | str) -> None:
        self._request("DELETE", f"/api/orders/{order_id}/")


def parse_order_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(status.value for status in OrderStatus)
        raise ApiError.validation(
            f"Unknown order status {value!r}; expected one of: {allowed}",
            code="INVALID_ORDER_STATUS",
        ) from exc
