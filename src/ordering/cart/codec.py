"""JSON codec for the persisted cart snapshot.

The snapshot is stored exactly as a browser would keep it: a JSON array of
``{"productId", "product", "quantity"}`` objects with camelCase keys and no
schema version. Decoding is strict; anything that does not fit the shape
raises ``DecodeError`` rather than quietly becoming an empty cart.
"""

import json

from protean.exceptions import ValidationError

from ordering.cart.line_item import CartLineItem, ProductSnapshot
from ordering.checkout.errors import DecodeError

_PRODUCT_KEYS = ("id", "title", "price")


def encode_line_item(item: CartLineItem) -> dict:
    return {
        "productId": item.product_id,
        "product": item.product.to_payload(),
        "quantity": item.quantity,
    }


def decode_line_item(entry, key: str = "cart") -> CartLineItem:
    if not isinstance(entry, dict):
        raise DecodeError(key, f"line item must be an object, got {type(entry).__name__}")

    product = entry.get("product")
    if not isinstance(product, dict):
        raise DecodeError(key, "line item has no product snapshot")
    missing = [name for name in _PRODUCT_KEYS if name not in product]
    if missing:
        raise DecodeError(key, f"product snapshot is missing {', '.join(missing)}")

    product_id = entry.get("productId")
    if product_id is None or str(product_id) != str(product["id"]):
        raise DecodeError(key, f"productId {product_id!r} does not match product {product['id']!r}")

    quantity = entry.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise DecodeError(key, f"invalid quantity {quantity!r} for product {product_id!r}")

    try:
        return CartLineItem(product=ProductSnapshot.from_payload(product), quantity=quantity)
    except ValidationError as exc:
        raise DecodeError(key, f"invalid line item for product {product_id!r}: {exc.messages}") from exc


def encode_items(items) -> str:
    return json.dumps([encode_line_item(item) for item in items], ensure_ascii=False)


def decode_items(raw, key: str = "cart") -> tuple[CartLineItem, ...]:
    """Decode a serialized snapshot.

    Raises ``DecodeError`` for invalid JSON, a non-array document, malformed
    line items, or two line items for the same product.
    """
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(key, f"invalid JSON ({exc.msg})") from exc
    else:
        data = raw

    if not isinstance(data, list):
        raise DecodeError(key, f"expected an array, got {type(data).__name__}")

    items = []
    seen = set()
    for entry in data:
        item = decode_line_item(entry, key)
        if item.product_id in seen:
            raise DecodeError(key, f"duplicate line item for product {item.product_id!r}")
        seen.add(item.product_id)
        items.append(item)
    return tuple(items)
