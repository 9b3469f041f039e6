"""Payment gateway factory.

Provides configure_gateway() / get_gateway() / set_gateway() to swap
implementations:
- RazorpayGateway when RAZORPAY_PROVIDER=razorpay (the default)
- FakeGateway for development and testing

The application calls configure_gateway() at startup so missing
credentials stop the service before any order is touched.
"""

import structlog

from payments.config import GatewayProvider, GatewaySettings
from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import PaymentGateway
from payments.gateway.razorpay_adapter import RazorpayGateway

logger = structlog.get_logger(__name__)

_current_gateway: PaymentGateway | None = None


def build_gateway(settings: GatewaySettings | None = None) -> PaymentGateway:
    """Construct the adapter selected by ``settings.provider``.

    Raises ConfigurationError when the credentials are absent.
    """
    settings = settings or GatewaySettings()
    if settings.provider == GatewayProvider.FAKE:
        return FakeGateway(settings if settings.has_credentials else None)
    return RazorpayGateway(settings)


def configure_gateway(settings: GatewaySettings | None = None) -> PaymentGateway:
    gateway = build_gateway(settings)
    set_gateway(gateway)
    logger.info(
        "payment_gateway_configured",
        gateway=type(gateway).__name__,
        currency=gateway.currency,
        webhook_signature=gateway.webhook_secret_configured,
    )
    return gateway


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it from settings on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Drop the active gateway, closing its HTTP client."""
    global _current_gateway
    if _current_gateway is not None:
        _current_gateway.close()
    _current_gateway = None
