"""Read-only catalogue queries. No identity required."""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


def get_product(product_id) -> Product:
    """Fetch one product with its reviews. Raises ``ObjectNotFoundError`` if absent."""
    return current_domain.repository_for(Product).get(product_id)


def list_products() -> list[Product]:
    return current_domain.repository_for(Product).list_by_name()
