"""Domain tests for reviews owned by the Product aggregate."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.events import ReviewAdded, ReviewEdited
from storefront.catalogue.product import Product
from storefront.errors import AlreadyReviewed, Forbidden


@pytest.fixture()
def product():
    product = Product.create(
        name="Linen Apron",
        description="Stonewashed linen.",
        image_url="https://cdn.example.com/img/apron.jpg",
        price=35.0,
    )
    product._events.clear()
    return product


class TestAddReview:
    def test_add_review(self, product):
        review = product.add_review("jdoe", "Fits well.", 4)

        assert product.review_count == 1
        assert review.username == "jdoe"
        assert review.created_at is not None

    def test_add_review_raises_event(self, product):
        review = product.add_review("jdoe", "Fits well.", 4)
        event = product._events[-1]
        assert isinstance(event, ReviewAdded)
        assert event.review_id == str(review.id)
        assert event.rating == 4

    def test_second_review_by_same_user_is_refused(self, product):
        product.add_review("jdoe", "Fits well.", 4)

        with pytest.raises(AlreadyReviewed):
            product.add_review("jdoe", "Changed my mind.", 2)

        assert product.review_count == 1
        assert product.reviews[0].body == "Fits well."

    def test_already_reviewed_is_a_forbidden_error(self, product):
        product.add_review("jdoe", "Fits well.", 4)
        with pytest.raises(Forbidden):
            product.add_review("jdoe", "Again.", 5)

    def test_different_users_can_each_review(self, product):
        product.add_review("jdoe", "Fits well.", 4)
        product.add_review("asmith", "Too long for me.", 2)
        assert product.review_count == 2

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_must_be_between_one_and_five(self, product, rating):
        with pytest.raises(ValidationError):
            product.add_review("jdoe", "Out of range.", rating)


class TestRating:
    def test_rating_is_zero_without_reviews(self, product):
        assert product.rating == 0
        assert product.review_count == 0

    def test_rating_is_mean_of_reviews(self, product):
        product.add_review("jdoe", "Great.", 5)
        product.add_review("asmith", "Fine.", 2)
        assert product.rating == 3.5


class TestEditReview:
    def test_edit_review_overwrites_in_place(self, product):
        original = product.add_review("jdoe", "Fits well.", 4)
        created_at = original.created_at

        edited = product.edit_review("jdoe", "Shrank in the wash.", 2)

        assert edited.id == original.id
        assert edited.body == "Shrank in the wash."
        assert edited.rating == 2
        assert edited.created_at == created_at
        assert product.review_count == 1

    def test_edit_review_raises_event(self, product):
        product.add_review("jdoe", "Fits well.", 4)
        product.edit_review("jdoe", "Shrank in the wash.", 2)
        assert isinstance(product._events[-1], ReviewEdited)

    def test_edit_without_prior_review_is_not_found(self, product):
        with pytest.raises(ObjectNotFoundError):
            product.edit_review("jdoe", "Never reviewed.", 3)
