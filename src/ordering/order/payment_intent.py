"""Attaching the processor's payment intent to a pending order."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class AttachPaymentIntent:
    order_id = Identifier(required=True)
    payment_intent_id = String(required=True, max_length=255)


@ordering.command_handler(part_of=Order)
class AttachPaymentIntentHandler:
    @handle(AttachPaymentIntent)
    def attach_payment_intent(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.attach_payment_intent(command.payment_intent_id)
        repo.add(order)
