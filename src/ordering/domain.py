"""Ordering bounded context — cart, checkout and orders.

Holds the client-side cart and order-history bookkeeping (persisted through a
key-value storage port), the server-side Order aggregate, and the checkout
flow that turns a cart into a pending order and a payment intent.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
