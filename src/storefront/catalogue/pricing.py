"""Sale pricing: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class SetSalePrice:
    product_id = Identifier(required=True)
    sale_price = Float(required=True)


@storefront.command(part_of="Product")
class EndSale:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class PricingHandler:
    @handle(SetSalePrice)
    def set_sale_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.put_on_sale(command.sale_price)
        repo.add(product)

    @handle(EndSale)
    def end_sale(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.end_sale()
        repo.add(product)
