"""Read-only category queries. No identity required."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.categories.category import Category


@dataclass(frozen=True)
class CategoryView:
    category: Category
    products: list[Product]


def _populate(category: Category) -> CategoryView:
    repo = current_domain.repository_for(Product)
    products = []
    for product_id in category.product_ids:
        try:
            products.append(repo.get(product_id))
        except ObjectNotFoundError:
            # Deleted from the catalogue after it was categorized
            continue
    return CategoryView(category=category, products=products)


def get_category(category_id) -> CategoryView:
    return _populate(current_domain.repository_for(Category).get(category_id))


def list_categories() -> list[Category]:
    return current_domain.repository_for(Category).list_by_name()


def get_category_by_name(name: str) -> CategoryView:
    category = current_domain.repository_for(Category).find_by_name(name)
    if category is None:
        raise ObjectNotFoundError({"category": [f"Category '{name}' not found"]})
    return _populate(category)


def list_category_names() -> list[str]:
    return [c.name for c in list_categories()]
