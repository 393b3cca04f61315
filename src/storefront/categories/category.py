"""Category aggregate: a named group of products.

Membership is by product id only; a category never owns a product's
lifecycle, and a product may sit in any number of categories.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, String

from storefront.categories.events import CategoryCreated, ProductCategorized
from storefront.domain import storefront


@storefront.entity(part_of="Category", limit=None)
class CategoryMember:
    product_id = Identifier(required=True)
    added_at = DateTime()


@storefront.aggregate(limit=None)
class Category:
    name = String(required=True, max_length=100)
    image_url = String(required=True, max_length=500)
    members = HasMany(CategoryMember)
    created_at = DateTime()

    @property
    def product_ids(self):
        return [str(m.product_id) for m in self.members]

    @property
    def product_count(self):
        return len(self.members)

    @classmethod
    def create(cls, name, image_url):
        now = datetime.now(UTC)
        category = cls(name=name, image_url=image_url, created_at=now)
        category.raise_(CategoryCreated(category_id=str(category.id), name=name, created_at=now))
        return category

    def add_product(self, product_id):
        """Add a product to the category. Adding an existing member changes nothing."""
        if str(product_id) in self.product_ids:
            return False

        self.add_members(CategoryMember(product_id=product_id, added_at=datetime.now(UTC)))
        self.raise_(ProductCategorized(category_id=str(self.id), product_id=str(product_id)))
        return True
