"""Cart Store: the shopper's line items, persisted through a storage port.

The store keeps no state of its own between calls. Every operation reads the
current snapshot from storage, applies its change and writes the whole
snapshot back before returning, so the stored record is always the source of
truth.
"""

import structlog
from protean.exceptions import ValidationError

from ordering.cart.codec import decode_items, encode_items
from ordering.cart.line_item import CartLineItem, ProductSnapshot
from ordering.checkout.errors import DecodeError
from ordering.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)

CART_KEY = "cart"


class CartStore:
    """Ordered, one-line-per-product cart over a ``KeyValueStore``."""

    def __init__(self, storage: KeyValueStore, key: str = CART_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self, reset_on_error: bool = False) -> tuple[CartLineItem, ...]:
        """Return the persisted snapshot, or an empty tuple when none exists.

        A corrupt record raises ``DecodeError``. With ``reset_on_error`` the
        record is logged, deleted and treated as empty instead.
        """
        raw = self.storage.get(self.key)
        if raw is None:
            return ()
        try:
            return decode_items(raw, self.key)
        except DecodeError as exc:
            if not reset_on_error:
                raise
            logger.warning("cart_snapshot_reset", key=self.key, reason=exc.reason)
            self.storage.delete(self.key)
            return ()

    def _save(self, items) -> tuple[CartLineItem, ...]:
        items = tuple(items)
        self.storage.set(self.key, encode_items(items))
        return items

    def add(self, product, quantity: int = 1) -> tuple[CartLineItem, ...]:
        """Add ``quantity`` of ``product``, merging into an existing line.

        ``product`` may be a catalogue ``Product`` or a ``ProductSnapshot``.
        Stock is not checked here.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        snapshot = product if isinstance(product, ProductSnapshot) else ProductSnapshot.from_product(product)
        items = list(self.load())

        for index, item in enumerate(items):
            if item.product_id == snapshot.product_id:
                items[index] = item.with_quantity(item.quantity + quantity)
                break
        else:
            items.append(CartLineItem(product=snapshot, quantity=quantity))

        logger.debug("cart_item_added", product_id=snapshot.product_id, quantity=quantity)
        return self._save(items)

    def set_quantity(self, product_id: str, new_quantity: int) -> tuple[CartLineItem, ...]:
        """Overwrite a line's quantity in place; zero or less removes the line."""
        if new_quantity <= 0:
            return self.remove(product_id)

        items = list(self.load())
        for index, item in enumerate(items):
            if item.product_id == str(product_id):
                items[index] = item.with_quantity(new_quantity)
                logger.debug("cart_quantity_updated", product_id=product_id, quantity=new_quantity)
                return self._save(items)
        return tuple(items)

    def remove(self, product_id: str) -> tuple[CartLineItem, ...]:
        """Drop the line for ``product_id``. Unknown ids are ignored."""
        items = self.load()
        remaining = tuple(item for item in items if item.product_id != str(product_id))
        if len(remaining) == len(items):
            return items
        logger.debug("cart_item_removed", product_id=product_id)
        return self._save(remaining)

    def clear(self) -> None:
        """Empty the cart by deleting its storage record."""
        self.storage.delete(self.key)
        logger.debug("cart_cleared", key=self.key)
