"""Configurable fake payment gateway for development and testing.

Simulates a hosted checkout without any external calls. It can be told
to succeed or fail at runtime and records every call it receives.
"""

from uuid import uuid4

from storefront.payments.gateway.port import (
    CheckoutSession,
    LineItem,
    PaymentGateway,
    PaymentGatewayError,
)


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_checkout_session(
        self,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "line_items": list(line_items),
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )

        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

        session_id = f"fake_cs_{uuid4().hex[:16]}"
        return CheckoutSession(session_id=session_id, url=f"https://checkout.fake/pay/{session_id}")
