"""Configurable fake payment gateway for development and testing.

Creates intents in memory without any external calls. It can be switched
to fail at runtime, which is useful for:
- Manual API testing via /payments/gateway/configure
- Automated tests with predictable outcomes
- Development without real gateway credentials

Signatures are real HMACs over the configured secrets, so a client
simulator can produce valid confirmations with ``sign_payment``.
"""

from datetime import UTC, datetime
from uuid import uuid4

from shared.errors import GatewayError

from payments.config import GatewayProvider, GatewaySettings
from payments.gateway.port import PaymentGateway, PaymentIntent

DEFAULT_FAKE_SETTINGS = {
    "provider": GatewayProvider.FAKE,
    "key_id": "rzp_test_fake",
    "key_secret": "fake-key-secret",
    "webhook_secret": "fake-webhook-secret",
}


class FakeGateway(PaymentGateway):
    """In-memory gateway that records every call it receives."""

    def __init__(self, settings: GatewaySettings | None = None) -> None:
        super().__init__(settings or GatewaySettings(**DEFAULT_FAKE_SETTINGS))
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_intent(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: dict | None = None,
    ) -> PaymentIntent:
        self.calls.append(
            {
                "method": "create_intent",
                "amount": amount_minor,
                "currency": currency,
                "receipt": receipt,
                "notes": dict(notes or {}),
            }
        )

        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

        return PaymentIntent(
            remote_id=f"order_fake_{uuid4().hex[:14]}",
            amount=amount_minor,
            currency=currency,
            receipt=receipt,
            status="created",
            created_at=datetime.now(UTC),
            notes=dict(notes or {}),
        )
