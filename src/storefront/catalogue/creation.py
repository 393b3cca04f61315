"""Product creation and removal: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text(required=True)
    image_url = String(required=True, max_length=500)
    price = Float(required=True, min_value=0.0)
    stock = Integer(required=True, min_value=0)


@storefront.command(part_of="Product")
class DeleteProduct:
    """Remove a product from the catalogue.

    Basket lines and category memberships that reference it are left alone.
    """

    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            image_url=command.image_url,
            price=command.price,
            stock=command.stock,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo.remove(product)
        logger.info("Product deleted", product_id=str(command.product_id))
