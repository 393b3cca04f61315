"""Payment gateway port (abstract interface).

Checkout only ever talks to this contract, so the hosted Stripe session
and the in-process fake are interchangeable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LineItem:
    """One priced line of a checkout session. Amounts are in minor units (cents)."""

    product_id: str
    name: str
    unit_amount: int
    quantity: int
    description: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class CheckoutSession:
    session_id: str
    url: str | None = None


class PaymentGatewayError(Exception):
    """The gateway refused or failed to create a session."""


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Create a hosted checkout session for the given line items.

        Raises PaymentGatewayError when the gateway does not produce a session.
        """
        ...
