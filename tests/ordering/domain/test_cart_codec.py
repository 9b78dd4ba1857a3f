import json

import pytest

from ordering.cart.codec import decode_items, encode_items
from ordering.cart.line_item import CartLineItem
from ordering.checkout.errors import DecodeError


def _entry(product_data, product_id="1", quantity=1, **product_overrides):
    return {"productId": product_id, "product": product_data(product_id, **product_overrides), "quantity": quantity}


class TestEncode:
    def test_encodes_browser_shape(self, make_product):
        raw = encode_items([CartLineItem(product=make_product("1", price=1000), quantity=2)])
        data = json.loads(raw)

        assert data == [
            {
                "productId": "1",
                "product": {
                    "id": "1",
                    "title": "Product 1",
                    "description": "A product",
                    "price": 1000,
                    "imageUrl": "https://images.example.com/1.jpg",
                    "category": "Audio",
                    "stock": 5,
                    "createdAt": "2024-01-01T00:00:00+00:00",
                    "updatedAt": "2024-01-01T00:00:00+00:00",
                },
                "quantity": 2,
            }
        ]

    def test_empty_snapshot_encodes_as_empty_array(self):
        assert encode_items([]) == "[]"


class TestDecode:
    def test_decodes_entries_in_order(self, product_data):
        raw = json.dumps([_entry(product_data, "b", 1), _entry(product_data, "a", 3)])
        items = decode_items(raw)

        assert [item.product_id for item in items] == ["b", "a"]
        assert items[1].quantity == 3

    def test_accepts_already_parsed_lists(self, product_data):
        items = decode_items([_entry(product_data, "1", 2)])
        assert items[0].quantity == 2

    def test_invalid_json(self):
        with pytest.raises(DecodeError) as exc:
            decode_items("{not json")
        assert exc.value.key == "cart"

    def test_non_array_document(self):
        with pytest.raises(DecodeError, match="expected an array"):
            decode_items('{"productId": "1"}')

    def test_entry_without_product(self):
        with pytest.raises(DecodeError, match="no product snapshot"):
            decode_items('[{"productId": "1", "quantity": 1}]')

    def test_product_missing_price(self, product_data):
        entry = _entry(product_data)
        del entry["product"]["price"]
        with pytest.raises(DecodeError, match="missing price"):
            decode_items([entry])

    @pytest.mark.parametrize("quantity", [0, -1, "2", 1.5, None, True])
    def test_invalid_quantity(self, product_data, quantity):
        with pytest.raises(DecodeError, match="invalid quantity"):
            decode_items([_entry(product_data, quantity=quantity)])

    def test_mismatched_product_id(self, product_data):
        entry = _entry(product_data, "1")
        entry["productId"] = "2"
        with pytest.raises(DecodeError, match="does not match"):
            decode_items([entry])

    def test_duplicate_product_ids(self, product_data):
        with pytest.raises(DecodeError, match="duplicate"):
            decode_items([_entry(product_data, "1"), _entry(product_data, "1")])

    def test_negative_price_is_a_decode_error(self, product_data):
        with pytest.raises(DecodeError):
            decode_items([_entry(product_data, price=-100)])
