"""Basket line management: commands and handler.

Every command checks the product against the live catalogue first, then
loads the caller's User and mutates its basket.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class AddBasketItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="User")
class RemoveBasketItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class DecrementBasketItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class ClearBasket:
    user_id = Identifier(required=True)


def _ensure_product_exists(product_id):
    # Raises ObjectNotFoundError for products missing from the catalogue
    current_domain.repository_for(Product).get(product_id)


@storefront.command_handler(part_of=User)
class ManageBasketHandler:
    @handle(AddBasketItem)
    def add_basket_item(self, command):
        _ensure_product_exists(command.product_id)
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        line = user.add_to_basket(command.product_id, command.quantity)
        repo.add(user)
        return line.quantity

    @handle(RemoveBasketItem)
    def remove_basket_item(self, command):
        _ensure_product_exists(command.product_id)
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_from_basket(command.product_id)
        repo.add(user)

    @handle(DecrementBasketItem)
    def decrement_basket_item(self, command):
        _ensure_product_exists(command.product_id)
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        line = user.decrement_basket_item(command.product_id)
        repo.add(user)
        return line.quantity if line is not None else 0

    @handle(ClearBasket)
    def clear_basket(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.clear_basket()
        repo.add(user)
