"""Order history commands: place an order, record its payment session."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class PlaceOrder:
    user_id = Identifier(required=True)
    product_ids = Text(required=True)  # JSON: flat list, one entry per unit


@storefront.command(part_of="User")
class AttachPaymentSession:
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    payment_session_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class OrderHistoryHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        order = user.place_order(json.loads(command.product_ids))
        repo.add(user)

        logger.info("Order placed", user_id=str(user.id), order_id=str(order.id))
        return str(order.id)

    @handle(AttachPaymentSession)
    def attach_payment_session(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.attach_payment_session(command.order_id, command.payment_session_id)
        repo.add(user)
