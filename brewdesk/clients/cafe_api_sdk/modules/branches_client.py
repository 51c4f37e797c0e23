from __future__ import annotations

from typing import Any, Mapping

from brewdesk.clients.cafe_api_sdk.models import BranchRecord
from brewdesk.clients.cafe_api_sdk.modules.base import BaseClient, parse_model


class BranchesClient(BaseClient):
    def list_branches(self) -> list[BranchRecord]:
        return [parse_model(BranchRecord, row) for row in self._rows("/api/branches/")]

    def get_branch(self, branch_id: int | str) -> BranchRecord:
        return parse_model(BranchRecord, self._object("GET", f"/api/branches/{branch_id}/"))

    def create_branch(self, payload: Mapping[str, Any]) -> BranchRecord:
        data = self._object("POST", "/api/branches/", json_body=dict(payload))
        return parse_model(BranchRecord, data)

    def update_branch(self, branch_id: int | str, patch: Mapping[str, Any]) -> BranchRecord:
        data = self._object("PATCH", f"/api/branches/{branch_id}/", json_body=dict(patch))
        return parse_model(BranchRecord, data)

    def delete_branch(self, branch_id: int | str) -> None:
        self._request("DELETE", f"/api/branches/{branch_id}/")
