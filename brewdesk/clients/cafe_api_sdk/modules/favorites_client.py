from __future__ import annotations

import logging
from dataclasses import dataclass

from brewdesk.clients.cafe_api_sdk.errors import ApiError
from brewdesk.clients.cafe_api_sdk.models import FavoriteRecord
from brewdesk.clients.cafe_api_sdk.modules.base import BaseClient, parse_model

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    added: bool
    favorite: FavoriteRecord | None = None


class FavoritesClient(BaseClient):
    def list_favorites(self) -> list[FavoriteRecord]:
        return [parse_model(FavoriteRecord, row) for row in self._rows("/api/favorites/")]

    def add_favorite(self, product_id: int) -> FavoriteRecord:
        data = self._object("POST", "/api/favorites/", json_body={"product": product_id})
        return parse_model(FavoriteRecord, data)

    def remove_favorite(self, favorite_id: int) -> None:
        self._request("DELETE", f"/api/favorites/{favorite_id}/")

    def is_favorite(self, product_id: int) -> bool:
        # advisory check: a failed lookup reads as "not a favorite"
        try:
            favorites = self.list_favorites()
        except ApiError as error:
            logger.warning("favorite lookup failed for product %s: %s", product_id, error)
            return False
        return any(favorite.product == product_id for favorite in favorites)

    def toggle_favorite(self, product_id: int) -> ToggleResult:
        favorites = self.list_favorites()
        existing = next((favorite for favorite in favorites if favorite.product == product_id), None)
        if existing is not None:
            self.remove_favorite(existing.id)
            return ToggleResult(added=False)
        return ToggleResult(added=True, favorite=self.add_favorite(product_id))
