"""Order creation — command and handler."""

import json

from protean import handle
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import ANONYMOUS_USER, Order


@ordering.command(part_of="Order")
class CreateOrder:
    user_id = String(max_length=255, default=ANONYMOUS_USER)
    items = Text(required=True)  # JSON: list of cart line item dicts
    total_amount = Integer(required=True, min_value=0)


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.create(
            items_data=items_data,
            total_amount=command.total_amount,
            user_id=command.user_id,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
