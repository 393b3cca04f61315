"""Domain tests for the Category aggregate."""

from storefront.categories.category import Category
from storefront.categories.events import CategoryCreated, ProductCategorized


def _category():
    category = Category.create(name="Kitchen", image_url="https://cdn.example.com/img/kitchen.jpg")
    category._events.clear()
    return category


class TestCategory:
    def test_create(self):
        category = Category.create(name="Kitchen", image_url="https://cdn.example.com/img/kitchen.jpg")

        assert category.name == "Kitchen"
        assert category.product_count == 0
        assert isinstance(category._events[0], CategoryCreated)

    def test_add_product(self):
        category = _category()

        assert category.add_product("prod-1") is True
        assert category.product_ids == ["prod-1"]
        assert isinstance(category._events[-1], ProductCategorized)

    def test_adding_a_member_twice_changes_nothing(self):
        category = _category()
        category.add_product("prod-1")
        category._events.clear()

        assert category.add_product("prod-1") is False
        assert category.product_count == 1
        assert category._events == []

    def test_members_keep_insertion_order(self):
        category = _category()
        category.add_product("prod-2")
        category.add_product("prod-1")
        assert category.product_ids == ["prod-2", "prod-1"]
