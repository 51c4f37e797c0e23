from __future__ import annotations

from typing import Any, Mapping

from brewdesk.clients.cafe_api_sdk.models import RedeemOffer, UserRedeem
from brewdesk.clients.cafe_api_sdk.modules.base import BaseClient, build_query_params, parse_model


class RedeemsClient(BaseClient):
    def list_offers(self) -> list[RedeemOffer]:
        return [parse_model(RedeemOffer, row) for row in self._rows("/api/redeem-offers/")]

    def get_offer(self, offer_id: int | str) -> RedeemOffer:
        return parse_model(RedeemOffer, self._object("GET", f"/api/redeem-offers/{offer_id}/"))

    def create_offer(self, payload: Mapping[str, Any]) -> RedeemOffer:
        data = self._object("POST", "/api/redeem-offers/", json_body=dict(payload))
        return parse_model(RedeemOffer, data)

    def update_offer(self, offer_id: int | str, payload: Mapping[str, Any]) -> RedeemOffer:
        data = self._object("PUT", f"/api/redeem-offers/{offer_id}/", json_body=dict(payload))
        return parse_model(RedeemOffer, data)

    def delete_offer(self, offer_id: int | str) -> None:
        self._request("DELETE", f"/api/redeem-offers/{offer_id}/")

    def list_user_redemptions(self, user_id: int | None = None) -> list[UserRedeem]:
        params = build_query_params(user=user_id)
        rows = self._rows("/api/user-redeem/", params=params or None)
        return [parse_model(UserRedeem, row) for row in rows]

    def create_user_redemption(self, offer_id: int) -> UserRedeem:
        data = self._object("POST", "/api/user-redeem/", json_body={"redeem": offer_id})
        return parse_model(UserRedeem, data)

    def get_user_redemption(self, redemption_id: int | str) -> UserRedeem:
        return parse_model(UserRedeem, self._object("GET", f"/api/user-redeem/{redemption_id}/"))
