import pytest
from protean.exceptions import ValidationError

from catalogue.product.events import ProductAdded
from catalogue.product.product import Product


@pytest.fixture()
def product():
    return Product.create(
        title="Wireless Earbuds",
        price=15000,
        description="High-fidelity wireless earbuds.",
        image_url="https://images.example.com/earbuds.jpg",
        category="Audio",
        stock=50,
    )


class TestProductCreation:
    def test_fields(self, product):
        assert product.title == "Wireless Earbuds"
        assert product.price == 15000
        assert product.stock == 50
        assert product.created_at == product.updated_at

    def test_raises_product_added(self, product):
        added = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(added) == 1
        assert added[0].product_id == product.id
        assert added[0].price == 15000

    def test_stock_defaults_to_zero(self):
        product = Product.create(title="Sticker", price=100)
        assert product.stock == 0
        assert not product.in_stock

    def test_in_stock(self, product):
        assert product.in_stock

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, title):
        with pytest.raises(ValidationError):
            Product.create(title=title, price=100)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(title="Broken", price=-1)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(title="Broken", price=100, stock=-1)


class TestPayload:
    def test_camel_case_keys(self, product):
        payload = product.to_payload()

        assert payload["id"] == str(product.id)
        assert payload["imageUrl"] == "https://images.example.com/earbuds.jpg"
        assert payload["createdAt"] == product.created_at.isoformat()
        assert set(payload) == {
            "id",
            "title",
            "description",
            "price",
            "imageUrl",
            "category",
            "stock",
            "createdAt",
            "updatedAt",
        }

    def test_missing_optional_fields_are_empty_strings(self):
        payload = Product.create(title="Bare", price=100).to_payload()

        assert payload["description"] == ""
        assert payload["imageUrl"] == ""
        assert payload["category"] == ""
