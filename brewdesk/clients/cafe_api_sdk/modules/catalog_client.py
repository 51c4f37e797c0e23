from __future__ import annotations

from typing import Any, Mapping

from brewdesk.clients.cafe_api_sdk.models import CategoryRecord, ProductRecord, SubCategoryRecord
from brewdesk.clients.cafe_api_sdk.modules.base import BaseClient, build_query_params, parse_model


class CatalogClient(BaseClient):
    def list_categories(self) -> list[CategoryRecord]:
        return [parse_model(CategoryRecord, row) for row in self._rows("/api/category/")]

    def create_category(self, name: str, description: str = "") -> CategoryRecord:
        data = self._object("POST", "/api/category/", json_body={"name": name, "description": description})
        return parse_model(CategoryRecord, data)

    def update_category(self, category_id: int | str, patch: Mapping[str, Any]) -> CategoryRecord:
        data = self._object("PATCH", f"/api/category/{category_id}/", json_body=dict(patch))
        return parse_model(CategoryRecord, data)

    def delete_category(self, category_id: int) -> None:
        self._request("DELETE", f"/api/category/{category_id}/")

    def list_subcategories(self, category_id: int | None = None) -> list[SubCategoryRecord]:
        params = build_query_params(category=category_id)
        rows = self._rows("/api/subcategory/", params=params or None)
        return [parse_model(SubCategoryRecord, row) for row in rows]

    def create_subcategory(self, name: str, category_id: int) -> SubCategoryRecord:
        data = self._object("POST", "/api/subcategory/", json_body={"name": name, "category": category_id})
        return parse_model(SubCategoryRecord, data)

    def update_subcategory(self, subcategory_id: int | str, patch: Mapping[str, Any]) -> SubCategoryRecord:
        data = self._object("PATCH", f"/api/subcategory/{subcategory_id}/", json_body=dict(patch))
        return parse_model(SubCategoryRecord, data)

    def delete_subcategory(self, subcategory_id: int) -> None:
        self._request("DELETE", f"/api/subcategory/{subcategory_id}/")

    def list_products(self) -> list[ProductRecord]:
        return [parse_model(ProductRecord, row) for row in self._rows("/api/products/")]

    def get_product(self, product_id: int | str) -> ProductRecord:
        return parse_model(ProductRecord, self._object("GET", f"/api/products/{product_id}/"))

    def create_product(
        self,
        payload: Mapping[str, Any],
        files: Mapping[str, Any] | None = None,
    ) -> ProductRecord:
        data = self._write("POST", "/api/products/", payload, files)
        return parse_model(ProductRecord, data)

    def update_product(
        self,
        product_id: int | str,
        patch: Mapping[str, Any],
        files: Mapping[str, Any] | None = None,
    ) -> ProductRecord:
        data = self._write("PATCH", f"/api/products/{product_id}/", patch, files)
        return parse_model(ProductRecord, data)

    def delete_product(self, product_id: int | str) -> None:
        self._request("DELETE", f"/api/products/{product_id}/")

    def _write(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any],
        files: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        # image uploads go out as multipart with the form fields alongside
        if files:
            return self._object(method, path, data=dict(payload), files=files)
        return self._object(method, path, json_body=dict(payload))
