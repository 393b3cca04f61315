"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockAdded:
    """Units were added to a product's stock."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)


@storefront.event(part_of="Product")
class StockRemoved:
    """Units were taken out of a product's stock."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)


@storefront.event(part_of="Product")
class SalePriceSet:
    __version__ = "v1"

    product_id = Identifier(required=True)
    price = Float(required=True)
    sale_price = Float(required=True)


@storefront.event(part_of="Product")
class SaleEnded:
    __version__ = "v1"

    product_id = Identifier(required=True)
    price = Float(required=True)


@storefront.event(part_of="Product")
class ReviewAdded:
    """A user reviewed a product for the first time."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    review_id = Identifier(required=True)
    username = String(required=True)
    rating = Integer(required=True)
    body = Text(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ReviewEdited:
    """A user rewrote their existing review of a product."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    review_id = Identifier(required=True)
    username = String(required=True)
    rating = Integer(required=True)
    body = Text(required=True)
