"""Order persistence as seen by checkout.

Wraps the Order commands so callers deal in plain values: line items in,
order id out. Commands are processed synchronously within the active
ordering domain context.
"""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.codec import encode_line_item
from ordering.order.cancellation import CancelOrder
from ordering.order.creation import CreateOrder
from ordering.order.order import ANONYMOUS_USER, Order
from ordering.order.payment_intent import AttachPaymentIntent

logger = structlog.get_logger(__name__)


class OrderService:
    def create_order(self, items, total_amount: int, user_id: str = ANONYMOUS_USER) -> str:
        """Record a pending order for ``items`` and return its id."""
        payload = json.dumps([encode_line_item(item) for item in items], ensure_ascii=False)
        order_id = current_domain.process(
            CreateOrder(user_id=user_id, items=payload, total_amount=total_amount),
            asynchronous=False,
        )
        logger.info("order_created", order_id=order_id, total_amount=total_amount, item_count=len(items))
        return order_id

    def get_order_by_id(self, order_id: str) -> Order | None:
        try:
            return current_domain.repository_for(Order).get(order_id)
        except ObjectNotFoundError:
            return None

    def attach_payment_intent(self, order_id: str, payment_intent_id: str) -> None:
        current_domain.process(
            AttachPaymentIntent(order_id=order_id, payment_intent_id=payment_intent_id),
            asynchronous=False,
        )

    def cancel_order(self, order_id: str, reason: str) -> None:
        current_domain.process(CancelOrder(order_id=order_id, reason=reason), asynchronous=False)
        logger.info("order_cancelled", order_id=order_id, reason=reason)
