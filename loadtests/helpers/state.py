"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for one simulated shopper session."""

    products: list[dict] = field(default_factory=list)
    cart_lines: int = 0
    order_id: str | None = None
    completed_orders: list[str] = field(default_factory=list)
