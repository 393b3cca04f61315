"""Application tests for category management and browsing."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.creation import DeleteProduct
from storefront.categories.browsing import (
    get_category,
    get_category_by_name,
    list_categories,
    list_category_names,
)
from storefront.categories.management import AddProductToCategory, CreateCategory, DeleteCategory
from storefront.errors import Forbidden
from storefront.gate import dispatch


@pytest.fixture()
def make_category(identity):
    def _make(name="Kitchen", image_url="https://cdn.example.com/img/kitchen.jpg"):
        return dispatch(CreateCategory(name=name, image_url=image_url), identity)

    return _make


class TestCreateCategory:
    def test_create_category(self, make_category):
        category_id = make_category()
        view = get_category(category_id)

        assert view.category.name == "Kitchen"
        assert view.products == []

    def test_duplicate_name_is_rejected(self, make_category):
        make_category(name="Kitchen")
        with pytest.raises(ValidationError):
            make_category(name="Kitchen")
        assert list_category_names() == ["Kitchen"]

    def test_create_without_identity_is_refused(self):
        with pytest.raises(Forbidden):
            dispatch(CreateCategory(name="Kitchen", image_url="https://cdn.example.com/img/kitchen.jpg"), None)
        assert list_categories() == []


class TestDeleteCategory:
    def test_delete_category(self, identity, make_category):
        category_id = make_category()
        dispatch(DeleteCategory(category_id=category_id), identity)

        with pytest.raises(ObjectNotFoundError):
            get_category(category_id)

    def test_delete_missing_category_is_not_found(self, identity):
        with pytest.raises(ObjectNotFoundError):
            dispatch(DeleteCategory(category_id="missing"), identity)


class TestMembership:
    def test_add_product_to_category(self, identity, make_category, make_product):
        category_id = make_category()
        product_id = make_product(name="Mug")

        dispatch(AddProductToCategory(category_id=category_id, product_id=product_id), identity)

        view = get_category(category_id)
        assert [p.name for p in view.products] == ["Mug"]

    def test_adding_twice_keeps_one_membership(self, identity, make_category, make_product):
        category_id = make_category()
        product_id = make_product()

        dispatch(AddProductToCategory(category_id=category_id, product_id=product_id), identity)
        dispatch(AddProductToCategory(category_id=category_id, product_id=product_id), identity)

        assert get_category(category_id).category.product_count == 1

    def test_missing_product_is_not_found(self, identity, make_category):
        category_id = make_category()
        with pytest.raises(ObjectNotFoundError):
            dispatch(AddProductToCategory(category_id=category_id, product_id="missing"), identity)

    def test_missing_category_is_not_found(self, identity, make_product):
        product_id = make_product()
        with pytest.raises(ObjectNotFoundError):
            dispatch(AddProductToCategory(category_id="missing", product_id=product_id), identity)

    def test_deleted_products_are_skipped(self, identity, make_category, make_product):
        category_id = make_category()
        mug = make_product(name="Mug")
        teapot = make_product(name="Teapot")
        for product_id in (mug, teapot):
            dispatch(AddProductToCategory(category_id=category_id, product_id=product_id), identity)

        dispatch(DeleteProduct(product_id=mug), identity)

        assert [p.name for p in get_category(category_id).products] == ["Teapot"]


class TestBrowsing:
    def test_list_sorted_by_name(self, make_category):
        make_category(name="Tableware")
        make_category(name="Bakeware")
        make_category(name="Linens")

        assert [c.name for c in list_categories()] == ["Bakeware", "Linens", "Tableware"]
        assert list_category_names() == ["Bakeware", "Linens", "Tableware"]

    def test_get_by_name(self, identity, make_category, make_product):
        category_id = make_category(name="Bakeware")
        product_id = make_product(name="Loaf Tin")
        dispatch(AddProductToCategory(category_id=category_id, product_id=product_id), identity)

        view = get_category_by_name("Bakeware")
        assert str(view.category.id) == category_id
        assert [p.name for p in view.products] == ["Loaf Tin"]

    def test_get_by_unknown_name_is_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            get_category_by_name("Garden")
