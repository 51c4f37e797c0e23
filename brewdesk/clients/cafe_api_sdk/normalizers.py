from __future__ import annotations

from typing import Any

_ROW_KEYS = ("results", "data", "items", "orders")


def normalize_listing(payload: Any) -> dict[str, Any]:
    """Accept a bare JSON array or a paginated envelope and return one shape.

    Envelopes follow the DRF page layout (``count``/``next``/``previous`` plus
    ``results``); ``data``, ``items`` and ``orders`` are accepted as row keys,
    and split ``present_orders``/``past_orders`` payloads are concatenated.
    """
    rows: list[Any] = []
    count: int | None = None
    next_url: str | None = None
    previous_url: str | None = None

    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        for key in _ROW_KEYS:
            if isinstance(payload.get(key), list):
                rows = payload[key]
                break
        else:
            present = payload.get("present_orders")
            past = payload.get("past_orders")
            if isinstance(present, list) or isinstance(past, list):
                rows = [*(present or []), *(past or [])]
        count = _to_int(payload.get("count"))
        next_url = payload.get("next") if isinstance(payload.get("next"), str) else None
        previous_url = payload.get("previous") if isinstance(payload.get("previous"), str) else None

    rows = [row for row in rows if row]
    return {
        "rows": rows,
        "count": count if count is not None else len(rows),
        "next": next_url,
        "previous": previous_url,
    }


def _to_int(value: Any) -> int | None:
    try:
        if value is None or value == "" or isinstance(value, bool):
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
