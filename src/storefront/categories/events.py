"""Domain events for the Category aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    __version__ = "v1"

    category_id = Identifier(required=True)
    name = String(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Category")
class ProductCategorized:
    """A product became a member of a category."""

    __version__ = "v1"

    category_id = Identifier(required=True)
    product_id = Identifier(required=True)
