"""Order status display.

Every known status has a fixed label and colour tag. Anything else, such as a
status written by a newer back office, renders as ``UNKNOWN`` with the raw
value as its label and a neutral tag instead of raising.
"""

from dataclasses import dataclass
from enum import Enum


class StatusBadge(Enum):
    PENDING = ("pending", "Processing", "yellow")
    PAID = ("paid", "Paid", "blue")
    SHIPPED = ("shipped", "Shipped", "purple")
    DELIVERED = ("delivered", "Delivered", "green")
    CANCELLED = ("cancelled", "Cancelled", "red")
    UNKNOWN = ("unknown", None, "gray")

    def __init__(self, status, label, colour):
        self.status = status
        self.label = label
        self.colour = colour

    @classmethod
    def for_status(cls, raw):
        for badge in cls:
            if badge is not cls.UNKNOWN and badge.status == raw:
                return badge
        return cls.UNKNOWN


@dataclass(frozen=True)
class StatusDisplay:
    badge: StatusBadge
    label: str
    colour: str

    @property
    def is_known(self):
        return self.badge is not StatusBadge.UNKNOWN


def display_status(raw) -> StatusDisplay:
    """Label and colour tag for a raw status value."""
    normalized = raw.strip().lower() if isinstance(raw, str) else raw
    badge = StatusBadge.for_status(normalized)
    if badge is StatusBadge.UNKNOWN:
        return StatusDisplay(badge=badge, label="" if raw is None else str(raw), colour=badge.colour)
    return StatusDisplay(badge=badge, label=badge.label, colour=badge.colour)
