"""Checkout: turn a flat list of purchased product ids into an order and a
hosted payment session.

Steps, in order:

1. Append the order to the caller's history (its own unit of work).
2. Group the list into a ``{product_id: count}`` manifest.
3. Price one line item per distinct product at its effective unit price.
4. Ask the payment gateway for a single session covering every line.
5. Record the session id on the order and hand the session back.

The order from step 1 is provisional: it stays in the history if any later
step fails, and only an order carrying a ``payment_session_id`` has reached
the gateway. Stock is not touched here; it is adjusted through the catalogue.
"""

import json

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.checkout.orders import AttachPaymentSession, PlaceOrder
from storefront.config import get_settings
from storefront.domain import logger
from storefront.errors import ExternalServiceFailure, Unauthenticated
from storefront.gate import dispatch
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import CheckoutSession, LineItem, PaymentGatewayError


def build_manifest(product_ids) -> dict[str, int]:
    """Count units per product id, keeping first-seen order."""
    manifest: dict[str, int] = {}
    for product_id in product_ids:
        key = str(product_id)
        manifest[key] = manifest.get(key, 0) + 1
    return manifest


def price_line_items(manifest: dict[str, int]) -> list[LineItem]:
    products = current_domain.repository_for(Product).get_many(manifest.keys())
    line_items = []
    for product_id, quantity in manifest.items():
        product = products[product_id]
        line_items.append(
            LineItem(
                product_id=product_id,
                name=product.name,
                unit_amount=round(product.effective_price * 100),
                quantity=quantity,
                description=product.description,
                image_url=product.image_url,
            )
        )
    return line_items


def redirect_urls(origin: str | None) -> tuple[str, str]:
    base = (origin or get_settings().public_url).rstrip("/")
    return f"{base}/success?session_id={{CHECKOUT_SESSION_ID}}", f"{base}/cart"


def checkout(identity, product_ids, origin=None, gateway=None) -> CheckoutSession:
    if identity is None:
        logger.warning("Checkout refused without identity")
        raise Unauthenticated()

    product_ids = [str(pid) for pid in product_ids or []]
    if not product_ids:
        raise ValidationError({"products": ["An order needs at least one product"]})

    order_id = dispatch(
        PlaceOrder(user_id=identity.user_id, product_ids=json.dumps(product_ids)),
        identity,
        error=Unauthenticated,
    )

    manifest = build_manifest(product_ids)
    line_items = price_line_items(manifest)
    success_url, cancel_url = redirect_urls(origin)

    gateway = gateway or get_gateway()
    try:
        session = gateway.create_checkout_session(line_items, success_url, cancel_url)
    except PaymentGatewayError as exc:
        logger.error(
            "Payment session creation failed",
            user_id=identity.user_id,
            order_id=order_id,
            reason=str(exc),
        )
        raise ExternalServiceFailure("Payment session could not be created.") from exc

    dispatch(
        AttachPaymentSession(
            user_id=identity.user_id,
            order_id=order_id,
            payment_session_id=session.session_id,
        ),
        identity,
        error=Unauthenticated,
    )
    logger.info(
        "Checkout session created",
        user_id=identity.user_id,
        order_id=order_id,
        session_id=session.session_id,
        lines=len(line_items),
    )
    return session
