"""Product aggregate root with the Review entity.

The product owns its stock count and its reviews. Stock never drops below
zero, and each username appears at most once in a product's review list.
Rating and review count are derived on read and never stored.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, Text

from storefront.catalogue.events import (
    ProductAdded,
    ReviewAdded,
    ReviewEdited,
    SaleEnded,
    SalePriceSet,
    StockAdded,
    StockRemoved,
)
from storefront.domain import storefront
from storefront.errors import AlreadyReviewed, InsufficientStock


@storefront.entity(part_of="Product", limit=None)
class Review:
    """A user's review of a product.

    ``username`` is a label copied at review time, not a reference to a live
    user record.
    """

    username = String(required=True, max_length=50)
    body = Text(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    created_at = DateTime()


@storefront.aggregate(limit=None)
class Product:
    """Product aggregate root."""

    name = String(required=True, max_length=255)
    description = Text(required=True)
    image_url = String(required=True, max_length=500)
    price = Float(required=True, min_value=0.0)
    sale_price = Float(min_value=0.0)
    on_sale = Boolean(default=False)
    stock = Integer(required=True, min_value=0)
    reviews = HasMany(Review)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @invariant.post
    def sale_price_required_when_on_sale(self):
        if self.on_sale and not self.sale_price:
            raise ValidationError({"sale_price": ["A product on sale must have a sale price"]})

    @invariant.post
    def one_review_per_username(self):
        usernames = [r.username for r in self.reviews]
        if len(usernames) != len(set(usernames)):
            raise ValidationError({"reviews": ["A user can review a product only once"]})

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def effective_price(self):
        """Unit price a buyer pays right now."""
        if self.on_sale and self.sale_price:
            return self.sale_price
        return self.price

    @property
    def review_count(self):
        return len(self.reviews)

    @property
    def rating(self):
        """Mean of all review ratings, 0 when there are none."""
        if not self.reviews:
            return 0
        return sum(r.rating for r in self.reviews) / len(self.reviews)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, description, image_url, price, stock=0):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            image_url=image_url,
            price=price,
            stock=stock,
            on_sale=False,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                price=price,
                stock=stock,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def add_stock(self, quantity):
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        previous = self.stock
        self.stock = previous + quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockAdded(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
            )
        )

    def remove_stock(self, quantity):
        """Take units out of stock, refusing to go below zero."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        previous = self.stock
        if previous < quantity:
            raise InsufficientStock(
                f"Insufficient stock: {previous} available, {quantity} requested",
                product_id=str(self.id),
                available=previous,
                requested=quantity,
            )

        self.stock = previous - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockRemoved(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
            )
        )

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def put_on_sale(self, sale_price):
        if sale_price is None or sale_price <= 0:
            raise ValidationError({"sale_price": ["Sale price must be positive"]})
        if sale_price >= self.price:
            raise ValidationError(
                {"sale_price": [f"Sale price ({sale_price}) must be less than the list price ({self.price})"]}
            )

        self.sale_price = sale_price
        self.on_sale = True
        self.updated_at = datetime.now(UTC)

        self.raise_(SalePriceSet(product_id=str(self.id), price=self.price, sale_price=sale_price))

    def end_sale(self):
        if not self.on_sale:
            raise ValidationError({"on_sale": ["Product is not on sale"]})

        self.on_sale = False
        self.updated_at = datetime.now(UTC)

        self.raise_(SaleEnded(product_id=str(self.id), price=self.price))

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def review_by(self, username):
        return next((r for r in self.reviews if r.username == username), None)

    def add_review(self, username, body, rating):
        if self.review_by(username) is not None:
            raise AlreadyReviewed(product_id=str(self.id), username=username)

        now = datetime.now(UTC)
        review = Review(username=username, body=body, rating=rating, created_at=now)
        self.add_reviews(review)
        self.updated_at = now

        self.raise_(
            ReviewAdded(
                product_id=str(self.id),
                review_id=str(review.id),
                username=username,
                rating=rating,
                body=body,
                created_at=now,
            )
        )
        return review

    def edit_review(self, username, body, rating):
        """Overwrite the user's review in place. ``created_at`` is left untouched."""
        review = self.review_by(username)
        if review is None:
            raise ObjectNotFoundError({"review": [f"{username} has not reviewed this product"]})

        review.body = body
        review.rating = rating
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ReviewEdited(
                product_id=str(self.id),
                review_id=str(review.id),
                username=username,
                rating=rating,
                body=body,
            )
        )
        return review
