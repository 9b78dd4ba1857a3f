"""Product creation — command and handler."""

from protean import handle
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    title: String(required=True, max_length=255)
    description: Text()
    price: Integer(required=True, min_value=0)
    image_url: String(max_length=500)
    category: String(max_length=100)
    stock: Integer(min_value=0, default=0)


@catalogue.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            title=command.title,
            description=command.description,
            price=command.price,
            image_url=command.image_url,
            category=command.category,
            stock=command.stock or 0,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
