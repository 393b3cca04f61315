"""Stock management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.errors import InsufficientStock


@storefront.command(part_of="Product")
class AddStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Product")
class RemoveStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command_handler(part_of=Product)
class StockHandler:
    @handle(AddStock)
    def add_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.add_stock(command.quantity)
        repo.add(product)
        return product.stock

    @handle(RemoveStock)
    def remove_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        try:
            product.remove_stock(command.quantity)
        except InsufficientStock:
            logger.warning(
                "Stock removal refused",
                product_id=str(product.id),
                available=product.stock,
                requested=command.quantity,
            )
            raise
        repo.add(product)
        return product.stock
