"""Turn Storefront error bodies into one-line Locust failure messages.

Shapes seen on the wire:

- request body validation (422): {"detail": [{"loc": [...], "msg": "..."}]}
- not found / forbidden (404/403): {"detail": "Product not found"}
- domain validation (400): {"error": {"quantity": ["Quantity must be at most 5"]}}
- checkout and payment failures (402/502/503/500): {"error": "Payment failed: ..."}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

_MAX_LEN = 300


def _join_field_errors(errors: dict) -> str:
    parts = []
    for field, messages in errors.items():
        if isinstance(messages, list):
            messages = "; ".join(str(m) for m in messages)
        parts.append(f"{field}: {messages}")
    return " | ".join(parts)


def extract_error_detail(response: Response) -> str:
    """Best-effort summary of an error response body."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:_MAX_LEN] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:_MAX_LEN]

    detail = body.get("detail")
    if isinstance(detail, list):
        return " | ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', err)}" for err in detail
        )
    if isinstance(detail, str):
        return detail

    error = body.get("error")
    if isinstance(error, dict):
        return _join_field_errors(error)
    if error is not None:
        return str(error)

    return str(body)[:_MAX_LEN]
