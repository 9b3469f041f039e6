"""Domain events for the Order aggregate.

Events are raised by the aggregate and dispatched when the repository
persists it. They are the audit trail of the two lifecycle axes: payment
(``is_paid``) and fulfilment (``status``).
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    item_count = Integer(required=True)
    total_price = Float(required=True)
    payment_method = String()
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentIntentRecorded:
    """A remote payment intent was created on the gateway for the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    provider_order_id = String(required=True)
    amount = Integer(required=True)  # minor units
    currency = String(required=True)
    recorded_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaid:
    """The order flipped from unpaid to paid."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    payment_id = String(required=True)
    provider_order_id = String()
    source = String(required=True)  # client_verification, webhook, manual
    paid_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved the order to a different fulfilment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDelivered:
    """The order reached the delivered status for the first time."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    delivered_at = DateTime(required=True)
