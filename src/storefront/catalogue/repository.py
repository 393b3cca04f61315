"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def list_by_name(self) -> list[Product]:
        """All products, sorted by name ascending."""
        return self._dao.query.order_by("name").limit(None).all().items

    def get_many(self, product_ids) -> dict[str, Product]:
        """Fetch products by id. Every id must exist."""
        ids = sorted({str(pid) for pid in product_ids})
        if not ids:
            return {}

        found = {str(p.id): p for p in self._dao.query.filter(id__in=ids).limit(None).all().items}
        missing = [pid for pid in ids if pid not in found]
        if missing:
            raise ObjectNotFoundError({"products": [f"Products not found: {', '.join(missing)}"]})
        return found

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
