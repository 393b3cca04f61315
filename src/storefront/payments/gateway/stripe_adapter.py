"""Stripe Checkout adapter.

Creates a hosted Checkout Session in payment mode with inline
``price_data`` for each line, so no Stripe-side Price objects are needed.
"""

import stripe

from storefront.payments.gateway.port import (
    CheckoutSession,
    LineItem,
    PaymentGateway,
    PaymentGatewayError,
)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, currency: str = "usd") -> None:
        self.api_key = api_key
        self.currency = currency

    def _price_data(self, item: LineItem) -> dict:
        product_data = {"name": item.name}
        if item.description:
            product_data["description"] = item.description
        if item.image_url:
            product_data["images"] = [item.image_url]

        return {
            "price_data": {
                "currency": self.currency,
                "product_data": product_data,
                "unit_amount": item.unit_amount,
            },
            "quantity": item.quantity,
        }

    def create_checkout_session(
        self,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                payment_method_types=["card"],
                mode="payment",
                line_items=[self._price_data(item) for item in line_items],
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as exc:
            raise PaymentGatewayError(str(exc)) from exc

        return CheckoutSession(session_id=session.id, url=session.url)
