"""User aggregate: account, basket and order history.

The basket holds at most one line per product; repeated additions grow the
line's quantity, and a line whose quantity would reach zero is removed. The
order history is append-only.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.identity.email import EmailAddress
from storefront.identity.events import (
    BasketCleared,
    BasketItemAdded,
    BasketItemDecremented,
    BasketItemRemoved,
    OrderPlaced,
    PaymentSessionAttached,
    UserRegistered,
)


@storefront.entity(part_of="User", limit=None)
class BasketItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    date_added = DateTime()


@storefront.entity(part_of="User", limit=None)
class Order:
    product_ids = Text(required=True)  # JSON: flat list, one entry per unit purchased
    purchase_date = DateTime(required=True)
    payment_session_id = String(max_length=255)

    @property
    def purchased_product_ids(self):
        return json.loads(self.product_ids) if self.product_ids else []


@storefront.aggregate(limit=None)
class User:
    username = String(required=True, max_length=50)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)
    basket = HasMany(BasketItem)
    orders = HasMany(Order)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_basket_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.basket]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"basket": ["A product can appear only once in the basket"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, username, email, password_hash):
        now = datetime.now(UTC)
        user = cls(
            username=username,
            email=EmailAddress(address=email).address,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                username=username,
                email=email,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Basket
    # -------------------------------------------------------------------
    def basket_line(self, product_id):
        return next((i for i in self.basket if str(i.product_id) == str(product_id)), None)

    def _require_basket_line(self, product_id):
        line = self.basket_line(product_id)
        if line is None:
            raise ObjectNotFoundError({"basket": [f"Product {product_id} is not in the basket"]})
        return line

    def add_to_basket(self, product_id, quantity):
        """Add units of a product, merging into the existing line if there is one."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        now = datetime.now(UTC)
        line = self.basket_line(product_id)
        if line is not None:
            line.quantity += quantity
        else:
            line = BasketItem(product_id=product_id, quantity=quantity, date_added=now)
            self.add_basket(line)

        self.updated_at = now

        self.raise_(
            BasketItemAdded(
                user_id=str(self.id),
                product_id=str(product_id),
                quantity_added=quantity,
                line_quantity=line.quantity,
            )
        )
        return line

    def remove_from_basket(self, product_id):
        """Drop the whole line, whatever its quantity."""
        line = self._require_basket_line(product_id)
        self.remove_basket(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(BasketItemRemoved(user_id=str(self.id), product_id=str(product_id)))

    def decrement_basket_item(self, product_id):
        """Take one unit off a line. The last unit takes the line with it."""
        line = self._require_basket_line(product_id)
        if line.quantity <= 1:
            self.remove_from_basket(product_id)
            return None

        line.quantity -= 1
        self.updated_at = datetime.now(UTC)

        self.raise_(
            BasketItemDecremented(
                user_id=str(self.id),
                product_id=str(product_id),
                line_quantity=line.quantity,
            )
        )
        return line

    def clear_basket(self):
        lines = list(self.basket)
        for line in lines:
            self.remove_basket(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(BasketCleared(user_id=str(self.id), lines_removed=len(lines)))

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def place_order(self, product_ids):
        """Append an order for a flat list of product ids (duplicates are extra units)."""
        if not product_ids:
            raise ValidationError({"products": ["An order needs at least one product"]})

        now = datetime.now(UTC)
        products_json = json.dumps([str(pid) for pid in product_ids])
        order = Order(product_ids=products_json, purchase_date=now)
        self.add_orders(order)
        self.updated_at = now

        self.raise_(
            OrderPlaced(
                user_id=str(self.id),
                order_id=str(order.id),
                product_ids=products_json,
                purchase_date=now,
            )
        )
        return order

    def attach_payment_session(self, order_id, payment_session_id):
        order = next((o for o in self.orders if str(o.id) == str(order_id)), None)
        if order is None:
            raise ObjectNotFoundError({"orders": [f"Order {order_id} not found"]})

        order.payment_session_id = payment_session_id
        self.updated_at = datetime.now(UTC)

        self.raise_(
            PaymentSessionAttached(
                user_id=str(self.id),
                order_id=str(order_id),
                payment_session_id=payment_session_id,
            )
        )
