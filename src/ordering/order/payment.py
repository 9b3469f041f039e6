"""Order payment: commands and handler.

Three ways an order becomes paid, all through the same conditional
transition on the aggregate:
- the client confirms a checkout and presents the gateway's signature
- an administrator records a payment taken outside the gateway
- the gateway's webhook reports a capture (see ordering.order.webhook)
"""

import structlog
from payments.amounts import to_minor_units
from payments.gateway import get_gateway
from protean import handle
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain
from shared.errors import InvalidAmount, InvalidSignature, NotFound, Unauthorized

from ordering.domain import ordering
from ordering.order.order import Order, PaymentSource

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class RequestPaymentIntent:
    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)


@ordering.command(part_of="Order")
class ConfirmClientPayment:
    order_id = Identifier(required=True)
    provider_order_id = String(required=True, max_length=255)
    provider_payment_id = String(required=True, max_length=255)
    signature = String(required=True, max_length=255)


@ordering.command(part_of="Order")
class RecordExternalPayment:
    order_id = Identifier(required=True)
    payment_id = String(required=True, max_length=255)
    provider_status = String(max_length=50)
    update_time = DateTime()
    payer_email = String(max_length=255)


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError as e:
        raise NotFound("Order not found") from e


def process_payment_command(command):
    """Process a paid-transition command, re-running it once on a version conflict.

    The re-run reloads the order, so the losing side of a race sees it paid
    and becomes a no-op.
    """
    try:
        return current_domain.process(command, asynchronous=False)
    except ExpectedVersionError:
        logger.info("order_payment_conflict_retry", command=type(command).__name__)
        return current_domain.process(command, asynchronous=False)


@ordering.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(RequestPaymentIntent)
    def request_payment_intent(self, command):
        # Resolving the gateway first surfaces a ConfigurationError before
        # the order is read or written.
        gateway = get_gateway()

        repo = current_domain.repository_for(Order)
        order = load_order(command.order_id)
        if not order.is_owned_by(command.requester_id):
            raise Unauthorized("Not authorized to pay for this order")
        if order.is_paid:
            raise ValidationError({"is_paid": ["Order is already paid"]})

        amount = to_minor_units(order.total_price)
        if amount <= 0:
            raise InvalidAmount()

        # One intent per order: a repeat request hands back the open intent so
        # a capture against it still finds this order.
        existing = order.open_intent()
        if existing is not None:
            logger.info(
                "payment_intent_reused",
                order_id=str(order.id),
                provider_order_id=existing.provider_order_id,
            )
            return {
                "provider_order_id": existing.provider_order_id,
                "amount": existing.amount if existing.amount is not None else amount,
                "currency": existing.currency or gateway.currency,
                "receipt": str(order.id),
                "status": "created",
                "created_at": existing.created_at or order.updated_at,
                "key_id": gateway.key_id,
            }

        intent = gateway.create_intent(
            amount_minor=amount,
            currency=gateway.currency,
            receipt=str(order.id),
            notes={
                "orderId": str(order.id),
                "userId": str(order.owner_id),
                "customerName": order.shipping_address.name if order.shipping_address else None,
                "customerEmail": order.shipping_address.email if order.shipping_address else None,
            },
        )

        order.record_payment_intent(
            intent.remote_id,
            amount=intent.amount,
            currency=intent.currency,
            created_at=intent.created_at,
        )
        repo.add(order)

        logger.info(
            "payment_intent_created",
            order_id=str(order.id),
            provider_order_id=intent.remote_id,
            amount=intent.amount,
            currency=intent.currency,
        )
        return {
            "provider_order_id": intent.remote_id,
            "amount": intent.amount,
            "currency": intent.currency,
            "receipt": intent.receipt,
            "status": intent.status,
            "created_at": intent.created_at,
            "key_id": gateway.key_id,
        }

    @handle(ConfirmClientPayment)
    def confirm_client_payment(self, command):
        gateway = get_gateway()
        repo = current_domain.repository_for(Order)
        order = load_order(command.order_id)

        if not gateway.verify_payment_signature(
            command.provider_order_id,
            command.provider_payment_id,
            command.signature,
        ):
            logger.warning(
                "payment_signature_mismatch",
                order_id=str(order.id),
                provider_order_id=command.provider_order_id,
            )
            raise InvalidSignature("Invalid payment signature")

        # An order that never requested an intent has nothing a client
        # signature can settle.
        if not order.provider_order_id or order.provider_order_id != command.provider_order_id:
            raise ValidationError({"provider_order_id": ["Payment does not belong to this order"]})

        applied = order.mark_paid(
            payment_id=command.provider_payment_id,
            source=PaymentSource.CLIENT_VERIFICATION.value,
            provider_order_id=command.provider_order_id,
            signature=command.signature,
        )
        if applied:
            repo.add(order)
            logger.info("order_paid", order_id=str(order.id), source=PaymentSource.CLIENT_VERIFICATION.value)
        else:
            logger.info("order_already_paid", order_id=str(order.id))
        return applied

    @handle(RecordExternalPayment)
    def record_external_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = load_order(command.order_id)

        applied = order.mark_paid(
            payment_id=command.payment_id,
            source=PaymentSource.MANUAL.value,
            payer_email=command.payer_email,
            provider_status=command.provider_status,
            paid_at=command.update_time,
        )
        if applied:
            repo.add(order)
            logger.info("order_paid", order_id=str(order.id), source=PaymentSource.MANUAL.value)
        return applied
