"""AddReview / EditReview: one review per user per product.

The existence check and the append run against a single loaded Product, and
the gate serializes commands per product, so two concurrent reviews by the
same user on the same product cannot both land.
"""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.errors import AlreadyReviewed


@storefront.command(part_of="Product")
class AddReview:
    product_id = Identifier(required=True)
    username = String(required=True, max_length=50)
    body = Text(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)


@storefront.command(part_of="Product")
class EditReview:
    product_id = Identifier(required=True)
    username = String(required=True, max_length=50)  # Must match the original author
    body = Text(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)


@storefront.command_handler(part_of=Product)
class ReviewModerationHandler:
    @handle(AddReview)
    def add_review(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        try:
            review = product.add_review(
                username=command.username,
                body=command.body,
                rating=command.rating,
            )
        except AlreadyReviewed:
            logger.info("Duplicate review refused", product_id=str(product.id), username=command.username)
            raise
        repo.add(product)
        return str(review.id)

    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        review = product.edit_review(
            username=command.username,
            body=command.body,
            rating=command.rating,
        )
        repo.add(product)
        return str(review.id)
