"""Response shaping for tool output replayed into the model context.

Shaping is lossy and only matches on field names. List payloads under
``data`` are capped, verbose fields are dropped and the nested pricing
object is reduced to the handful of fields the assistant quotes.
"""

from typing import Any

DEFAULT_MAX_ITEMS = 20

DROPPED_FIELDS = frozenset({"collateral", "collateral_data_confidence", "guarantee_data_confidence"})

PRICING_FIELDS = ("last_price", "ytm", "spread", "price_source")


def slim_item(item: Any) -> Any:
    """Drop verbose fields from one result item and collapse its pricing."""
    if not isinstance(item, dict):
        return item
    slim: dict[str, Any] = {}
    for key, value in item.items():
        if key in DROPPED_FIELDS:
            continue
        if key == "pricing" and isinstance(value, dict):
            slim["pricing"] = {name: value.get(name) for name in PRICING_FIELDS}
            continue
        slim[key] = value
    return slim


def shape_response(payload: Any, max_items: int = DEFAULT_MAX_ITEMS) -> Any:
    """Cap and slim a backend response envelope.

    Args:
        payload: Parsed JSON body returned by the backend
        max_items: Maximum number of list items kept under ``data``

    Returns:
        The shaped payload. Anything other than an object holding a list under
        ``data`` is returned unchanged. When items were dropped, a
        ``_truncated`` marker records how many were shown out of the total.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        return payload

    items = payload["data"]
    total = len(items)
    shaped = {**payload, "data": [slim_item(item) for item in items[:max_items]]}
    if total > max_items:
        shaped["_truncated"] = {"shown": max_items, "total": total}
    return shaped
