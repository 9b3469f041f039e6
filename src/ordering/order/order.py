"""Order aggregate: the core of the ordering domain.

An order moves along two independent axes:

    Payment:     unpaid → intent requested → paid
    Fulfilment:  pending | processing | shipped | delivered | cancelled

Payment only moves forward, and the paid transition is conditional: the
first confirmation wins and any later one (client retry, webhook
redelivery, racing webhook) is a no-op. Fulfilment status is set by
administrators; reaching ``delivered`` stamps delivery exactly once.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import (
    OrderDelivered,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
    PaymentIntentRecorded,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStage(Enum):
    CREATED = "created"
    COMPLETED = "completed"


class PaymentSource(Enum):
    CLIENT_VERIFICATION = "client_verification"
    WEBHOOK = "webhook"
    MANUAL = "manual"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships to, captured at placement and never changed."""

    name = String(max_length=255)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    email = String(max_length=255)
    phone = String(max_length=30)


@ordering.value_object(part_of="Order")
class PaymentResult:
    """Gateway-side payment record, tagged by ``stage``.

    ``created`` carries the remote order id returned by intent creation
    together with the amount and currency it was issued for. ``completed``
    carries the captured payment.
    """

    stage = String(required=True, choices=PaymentStage)
    provider_order_id = String(max_length=255)
    payment_id = String(max_length=255)
    signature = String(max_length=255)
    provider_status = String(max_length=50)
    payer_email = String(max_length=255)
    completed_at = DateTime()
    amount = Integer()
    currency = String(max_length=3)
    created_at = DateTime()

    @invariant.post
    def stage_fields_must_be_present(self):
        if self.stage == PaymentStage.CREATED.value and not self.provider_order_id:
            raise ValidationError({"payment_result": ["A created payment needs the provider order id"]})
        if self.stage == PaymentStage.COMPLETED.value and not (self.payment_id and self.completed_at):
            raise ValidationError({"payment_result": ["A completed payment needs a payment id and completion time"]})

    @classmethod
    def created(cls, provider_order_id, amount=None, currency=None, created_at=None):
        return cls(
            stage=PaymentStage.CREATED.value,
            provider_order_id=provider_order_id,
            provider_status="created",
            amount=amount,
            currency=currency,
            created_at=created_at,
        )

    @classmethod
    def completed(
        cls,
        payment_id,
        completed_at,
        provider_order_id=None,
        signature=None,
        payer_email=None,
        provider_status="completed",
    ):
        return cls(
            stage=PaymentStage.COMPLETED.value,
            payment_id=payment_id,
            provider_order_id=provider_order_id,
            signature=signature,
            payer_email=payer_email,
            provider_status=provider_status or "completed",
            completed_at=completed_at,
        )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line of the order: product reference, display name, price and quantity."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    image = String(max_length=1000)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    owner_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(max_length=50)
    items_price = Float(default=0.0, min_value=0.0)
    tax_price = Float(default=0.0, min_value=0.0)
    shipping_price = Float(default=0.0, min_value=0.0)
    total_price = Float(default=0.0, min_value=0.0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    provider_order_id = String(max_length=255)
    payment_result = ValueObject(PaymentResult)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def paid_orders_carry_a_completed_payment(self):
        if not self.is_paid:
            return
        if self.paid_at is None:
            raise ValidationError({"paid_at": ["A paid order must record when it was paid"]})
        if self.payment_result is None or self.payment_result.stage != PaymentStage.COMPLETED.value:
            raise ValidationError({"payment_result": ["A paid order must carry a completed payment result"]})

    @invariant.post
    def delivered_orders_are_stamped(self):
        if self.status == OrderStatus.DELIVERED.value and not (self.is_delivered and self.delivered_at):
            raise ValidationError({"status": ["A delivered order must record its delivery"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        owner_id,
        items_data,
        shipping_address,
        payment_method,
        items_price=0.0,
        tax_price=0.0,
        shipping_price=0.0,
        total_price=0.0,
    ):
        """Place a new pending, unpaid order.

        Args:
            owner_id: The user placing the order.
            items_data: List of dicts with product_id, name, quantity,
                        unit_price and optionally image.
            shipping_address: Dict matching ShippingAddress.
            payment_method: Opaque method label, e.g. "razorpay" or "cod".
            items_price, tax_price, shipping_price, total_price: Amounts as
                computed by the client; stored as given.
        """
        if not items_data:
            raise ValidationError({"order_items": ["No order items"]})

        now = datetime.now(UTC)
        order = cls(
            owner_id=owner_id,
            items=[OrderItem(**item) for item in items_data],
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            items_price=items_price or 0.0,
            tax_price=tax_price or 0.0,
            shipping_price=shipping_price or 0.0,
            total_price=total_price or 0.0,
            status=OrderStatus.PENDING.value,
            is_paid=False,
            is_delivered=False,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                owner_id=str(owner_id),
                item_count=len(items_data),
                total_price=order.total_price,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def short_id(self):
        return str(self.id)[:8]

    def is_owned_by(self, user_id) -> bool:
        return str(self.owner_id) == str(user_id)

    def open_intent(self):
        """The issued, not yet settled payment intent, if there is one."""
        if self.is_paid or self.payment_result is None:
            return None
        if self.payment_result.stage != PaymentStage.CREATED.value:
            return None
        return self.payment_result

    def price_breakdown_mismatches(self) -> list[str]:
        """Names of client-supplied totals that disagree with the line items."""
        mismatches = []
        lines_total = round(sum(item.line_total for item in self.items), 2)
        if abs(lines_total - (self.items_price or 0.0)) > 0.01:
            mismatches.append("items_price")
        expected_total = round((self.items_price or 0.0) + (self.tax_price or 0.0) + (self.shipping_price or 0.0), 2)
        if abs(expected_total - (self.total_price or 0.0)) > 0.01:
            mismatches.append("total_price")
        return mismatches

    # -------------------------------------------------------------------
    # Payment axis
    # -------------------------------------------------------------------
    def record_payment_intent(self, provider_order_id, amount, currency, created_at=None):
        """Remember the remote intent so webhooks can find this order."""
        if self.is_paid:
            raise ValidationError({"is_paid": ["Order is already paid"]})
        open_intent = self.open_intent()
        if open_intent is not None and open_intent.provider_order_id != provider_order_id:
            raise ValidationError({"provider_order_id": ["Order already has an open payment intent"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.provider_order_id = provider_order_id
            self.payment_result = PaymentResult.created(
                provider_order_id, amount=amount, currency=currency, created_at=created_at or now
            )
            self.updated_at = now

        self.raise_(
            PaymentIntentRecorded(
                order_id=str(self.id),
                provider_order_id=provider_order_id,
                amount=amount,
                currency=currency,
                recorded_at=now,
            )
        )

    def mark_paid(
        self,
        payment_id,
        source,
        provider_order_id=None,
        signature=None,
        payer_email=None,
        provider_status="completed",
        paid_at=None,
    ) -> bool:
        """Flip the order to paid unless it already is.

        Returns True when the transition was applied, False when the order
        was already paid and nothing changed.
        """
        if self.is_paid:
            return False

        now = datetime.now(UTC)
        paid_at = paid_at or now
        provider_order_id = provider_order_id or self.provider_order_id
        with atomic_change(self):
            self.is_paid = True
            self.paid_at = paid_at
            self.payment_result = PaymentResult.completed(
                payment_id=payment_id,
                completed_at=paid_at,
                provider_order_id=provider_order_id,
                signature=signature,
                payer_email=payer_email,
                provider_status=provider_status,
            )
            self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                owner_id=str(self.owner_id),
                payment_id=payment_id,
                provider_order_id=provider_order_id,
                source=source,
                paid_at=paid_at,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Fulfilment axis
    # -------------------------------------------------------------------
    def change_status(self, new_status) -> str:
        """Set the fulfilment status and return the previous one.

        ``delivered`` also stamps delivery, only the first time it is reached.
        """
        try:
            target = OrderStatus(str(new_status).lower())
        except ValueError as e:
            raise ValidationError({"status": [f"Invalid order status: {new_status}"]}) from e

        previous = self.status
        now = datetime.now(UTC)
        first_delivery = target == OrderStatus.DELIVERED and not self.is_delivered

        with atomic_change(self):
            self.status = target.value
            if first_delivery:
                self.is_delivered = True
                self.delivered_at = now
            self.updated_at = now

        if previous != target.value:
            self.raise_(
                OrderStatusChanged(
                    order_id=str(self.id),
                    owner_id=str(self.owner_id),
                    previous_status=previous,
                    new_status=target.value,
                    changed_at=now,
                )
            )
        if first_delivery:
            self.raise_(
                OrderDelivered(
                    order_id=str(self.id),
                    owner_id=str(self.owner_id),
                    delivered_at=now,
                )
            )
        return previous
