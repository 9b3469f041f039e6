"""Payment gateway port (abstract interface).

Adapters implement remote intent creation. Signature checks are local HMAC
computations shared by every adapter, keyed with the secrets from
``GatewaySettings``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from shared.errors import ConfigurationError

from payments.config import GatewaySettings
from payments.gateway.signing import payment_message, sign, signatures_match


@dataclass(frozen=True)
class PaymentIntent:
    """A remote order created on the gateway, awaiting client payment."""

    remote_id: str
    amount: int
    currency: str
    receipt: str
    status: str
    created_at: datetime
    notes: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    def __init__(self, settings: GatewaySettings) -> None:
        if not settings.has_credentials:
            raise ConfigurationError("Payment gateway credentials (key id and key secret) are not configured")
        self.settings = settings

    @property
    def key_id(self) -> str:
        return self.settings.key_id

    @property
    def currency(self) -> str:
        return self.settings.currency

    @property
    def webhook_secret_configured(self) -> bool:
        return bool(self.settings.webhook_secret_value())

    @abstractmethod
    def create_intent(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: dict | None = None,
    ) -> PaymentIntent:
        """Create a remote payment intent for ``amount_minor`` units of ``currency``."""
        ...

    def close(self) -> None:  # noqa: B027
        """Release network resources held by the adapter."""

    def sign_payment(self, provider_order_id: str, provider_payment_id: str) -> str:
        return sign(payment_message(provider_order_id, provider_payment_id), self.settings.secret())

    def verify_payment_signature(self, provider_order_id: str, provider_payment_id: str, signature: str) -> bool:
        expected = self.sign_payment(provider_order_id, provider_payment_id)
        return signatures_match(expected, signature)

    def sign_webhook(self, payload: bytes) -> str:
        return sign(payload, self.settings.webhook_secret_value())

    def verify_webhook_signature(self, payload: bytes, signature: str | None) -> bool:
        """Check a webhook body against its signature header.

        Callers decide what to do when no webhook secret is configured; this
        method only answers for a configured secret.
        """
        if not self.webhook_secret_configured:
            return False
        return signatures_match(self.sign_webhook(payload), signature)
