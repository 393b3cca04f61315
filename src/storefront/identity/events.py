"""Domain events for the User aggregate: registration, basket and orders."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    __version__ = "v1"

    user_id = Identifier(required=True)
    username = String(required=True)
    email = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class BasketItemAdded:
    """A product was added to the basket, or an existing line grew."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="User")
class BasketItemDecremented:
    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="User")
class BasketItemRemoved:
    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="User")
class BasketCleared:
    __version__ = "v1"

    user_id = Identifier(required=True)
    lines_removed = Integer(required=True)


@storefront.event(part_of="User")
class OrderPlaced:
    """An order was appended to the user's history, ahead of payment."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    product_ids = Text(required=True)  # JSON: flat list, one entry per unit
    purchase_date = DateTime(required=True)


@storefront.event(part_of="User")
class PaymentSessionAttached:
    __version__ = "v1"

    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    payment_session_id = String(required=True)
