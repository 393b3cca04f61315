"""Basket read model, priced from live catalogue data on every read.

Nothing here is cached on the User record: a price change or a sale shows up
in the next read. Lines whose product has since been deleted stay visible
with ``product=None`` and contribute nothing to the total.
"""

from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.gate import Identity, require_identity
from storefront.identity.user import User


@dataclass(frozen=True)
class BasketLine:
    product_id: str
    quantity: int
    date_added: object
    product: Product | None

    @property
    def line_total(self) -> float:
        if self.product is None:
            return 0.0
        return self.product.effective_price * self.quantity


@dataclass(frozen=True)
class UserView:
    user: User
    lines: list[BasketLine] = field(default_factory=list)

    @property
    def basket_count(self) -> int:
        """Number of distinct lines in the basket."""
        return len(self.lines)

    @property
    def basket_units(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def basket_total(self) -> float:
        return round(sum(line.line_total for line in self.lines), 2)


def _load_product(product_id):
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None


def view_user(user: User) -> UserView:
    lines = [
        BasketLine(
            product_id=str(item.product_id),
            quantity=item.quantity,
            date_added=item.date_added,
            product=_load_product(item.product_id),
        )
        for item in user.basket
    ]
    return UserView(user=user, lines=lines)


def current_user(identity: Identity | None) -> UserView:
    """The caller's account with its basket populated. Requires an identity."""
    require_identity(identity)
    return view_user(current_domain.repository_for(User).get(identity.user_id))
