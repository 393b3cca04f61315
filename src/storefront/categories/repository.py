"""Repository for the Category aggregate."""

from storefront.categories.category import Category
from storefront.domain import storefront


@storefront.repository(part_of=Category)
class CategoryRepository:
    def list_by_name(self) -> list[Category]:
        return self._dao.query.order_by("name").limit(None).all().items

    def find_by_name(self, name: str) -> Category | None:
        return self._dao.query.filter(name=name).all().first

    def remove(self, category: Category) -> None:
        self._dao.delete(category)
