from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from brewdesk.clients.cafe_api_sdk.errors import ApiError, ErrorKind
from brewdesk.clients.cafe_api_sdk.http_client import HttpClient
from brewdesk.clients.cafe_api_sdk.normalizers import normalize_listing

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class BaseClient:
    http: HttpClient

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        return self.http.request(method, path, **kwargs)

    def _object(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        payload = self._request(method, path, **kwargs)
        if not isinstance(payload, dict):
            raise ApiError(
                kind=ErrorKind.PROTOCOL_ERROR,
                message=f"Expected a JSON object from {path}",
                code="UNEXPECTED_PAYLOAD",
            )
        return payload

    def _rows(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        payload = self._request("GET", path, params=params)
        return normalize_listing(payload)["rows"]


def parse_model(model: Type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ApiError(
            kind=ErrorKind.PROTOCOL_ERROR,
            message=f"Malformed {model.__name__} payload",
            code="UNEXPECTED_PAYLOAD",
            details={"errors": exc.errors(include_url=False)},
        ) from exc


def build_query_params(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value not in (None, "")}
