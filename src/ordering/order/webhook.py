"""Gateway webhook reconciliation.

The webhook is authenticated and parsed outside the unit of work, then a
capture is applied through ``RecordGatewayCapture``. Every outcome that is
not a signature or payload failure is acknowledged, so the gateway does not
keep redelivering events this service has already settled.
"""

from enum import Enum

import structlog
from payments.gateway import get_gateway
from payments.gateway.webhook import parse_webhook_event
from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain
from shared.errors import InvalidSignature

from ordering.domain import ordering
from ordering.order.order import Order, PaymentSource
from ordering.order.payment import process_payment_command

logger = structlog.get_logger(__name__)


class ReconciliationOutcome(Enum):
    APPLIED = "applied"
    ALREADY_PAID = "already_paid"
    UNKNOWN_ORDER = "unknown_order"
    IGNORED = "ignored"


@ordering.command(part_of="Order")
class RecordGatewayCapture:
    provider_order_id = String(required=True, max_length=255)
    payment_id = String(required=True, max_length=255)
    amount = Integer()
    payer_email = String(max_length=255)


@ordering.command_handler(part_of=Order)
class GatewayCaptureHandler:
    @handle(RecordGatewayCapture)
    def record_gateway_capture(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_provider_order_id(command.provider_order_id)
        if order is None:
            logger.info("webhook_unknown_order", provider_order_id=command.provider_order_id)
            return ReconciliationOutcome.UNKNOWN_ORDER.value

        applied = order.mark_paid(
            payment_id=command.payment_id,
            source=PaymentSource.WEBHOOK.value,
            provider_order_id=command.provider_order_id,
            payer_email=command.payer_email,
            provider_status="captured",
        )
        if not applied:
            return ReconciliationOutcome.ALREADY_PAID.value

        repo.add(order)
        logger.info("order_paid", order_id=str(order.id), source=PaymentSource.WEBHOOK.value)
        return ReconciliationOutcome.APPLIED.value


def reconcile_webhook(raw_payload: bytes, signature: str | None) -> str:
    """Authenticate, parse and apply one webhook delivery.

    Returns the ReconciliationOutcome value. Raises InvalidSignature when a
    configured secret does not match, and ValidationError for a body that
    is not a webhook event.
    """
    gateway = get_gateway()

    if gateway.webhook_secret_configured:
        if not gateway.verify_webhook_signature(raw_payload, signature):
            logger.warning("webhook_signature_invalid", has_signature=bool(signature))
            raise InvalidSignature("Invalid webhook signature")
    elif gateway.settings.require_webhook_signature:
        logger.error("webhook_rejected_no_secret")
        raise InvalidSignature("Webhook signature cannot be verified")
    else:
        logger.warning("webhook_unverified", reason="no webhook secret configured")

    event = parse_webhook_event(raw_payload)
    if not event.is_capture:
        logger.info("webhook_ignored", webhook_event=event.event)
        return ReconciliationOutcome.IGNORED.value

    if not (event.provider_order_id and event.payment_id):
        logger.warning("webhook_capture_incomplete", webhook_event=event.event)
        return ReconciliationOutcome.IGNORED.value

    return process_payment_command(
        RecordGatewayCapture(
            provider_order_id=event.provider_order_id,
            payment_id=event.payment_id,
            amount=event.amount,
            payer_email=event.payer_email,
        )
    )
