"""Client-local order history.

Completed orders are appended to the ``orderHistory`` record after the
payment widget reports success. The log is keyed by order id: recording the
same order again leaves it unchanged.
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from ordering.cart.codec import decode_line_item, encode_line_item
from ordering.cart.line_item import CartLineItem
from ordering.checkout.errors import DecodeError
from ordering.order.order import OrderStatus
from ordering.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)

HISTORY_KEY = "orderHistory"


@dataclass(frozen=True)
class OrderHistoryEntry:
    id: str
    items: tuple[CartLineItem, ...]
    total_amount: int
    status: str = OrderStatus.PAID.value
    created_at: str | None = None
    updated_at: str | None = None
    extra: dict = field(default_factory=dict, compare=False)

    def to_payload(self):
        return {
            **self.extra,
            "id": self.id,
            "items": [encode_line_item(item) for item in self.items],
            "totalAmount": self.total_amount,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_payload(cls, payload, key=HISTORY_KEY):
        if not isinstance(payload, dict):
            raise DecodeError(key, f"history entry must be an object, got {type(payload).__name__}")
        if not payload.get("id"):
            raise DecodeError(key, "history entry has no id")
        if not isinstance(payload.get("items"), list):
            raise DecodeError(key, f"history entry {payload['id']!r} has no items")
        total = payload.get("totalAmount")
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            raise DecodeError(key, f"history entry {payload['id']!r} has invalid totalAmount {total!r}")

        known = {"id", "items", "totalAmount", "status", "createdAt", "updatedAt"}
        return cls(
            id=str(payload["id"]),
            items=tuple(decode_line_item(entry, key) for entry in payload["items"]),
            total_amount=total,
            status=payload.get("status") or OrderStatus.PAID.value,
            created_at=payload.get("createdAt"),
            updated_at=payload.get("updatedAt"),
            extra={k: v for k, v in payload.items() if k not in known},
        )


class OrderHistory:
    """Append-only, id-keyed log of completed orders over a ``KeyValueStore``."""

    def __init__(self, storage: KeyValueStore, key: str = HISTORY_KEY) -> None:
        self.storage = storage
        self.key = key

    def entries(self) -> tuple[OrderHistoryEntry, ...]:
        """All recorded orders, oldest first."""
        raw = self.storage.get(self.key)
        if raw is None:
            return ()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(self.key, f"invalid JSON ({exc.msg})") from exc
        if not isinstance(data, list):
            raise DecodeError(self.key, f"expected an array, got {type(data).__name__}")
        return tuple(OrderHistoryEntry.from_payload(entry, self.key) for entry in data)

    def get(self, order_id: str) -> OrderHistoryEntry | None:
        return next((entry for entry in self.entries() if entry.id == str(order_id)), None)

    def record_completed_order(self, order_id: str, items, total_amount: int) -> bool:
        """Append a ``paid`` entry for ``order_id``.

        Returns False, and writes nothing, when the order is already recorded.
        """
        entries = self.entries()
        if any(entry.id == str(order_id) for entry in entries):
            logger.info("order_history_duplicate_skipped", order_id=order_id)
            return False

        now = datetime.now(UTC).isoformat()
        entry = OrderHistoryEntry(
            id=str(order_id),
            items=tuple(items),
            total_amount=total_amount,
            status=OrderStatus.PAID.value,
            created_at=now,
            updated_at=now,
        )
        payload = [existing.to_payload() for existing in entries] + [entry.to_payload()]
        self.storage.set(self.key, json.dumps(payload, ensure_ascii=False))
        logger.info("order_history_recorded", order_id=order_id, total_amount=total_amount)
        return True
