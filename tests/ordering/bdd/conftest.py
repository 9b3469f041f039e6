"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.events import (
    OrderDelivered,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
    PaymentIntentRecorded,
)
from ordering.order.order import Order, PaymentSource
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "PaymentIntentRecorded": PaymentIntentRecorded,
    "OrderPaid": OrderPaid,
    "OrderStatusChanged": OrderStatusChanged,
    "OrderDelivered": OrderDelivered,
}


@pytest.fixture()
def error():
    """Container for a captured validation error."""
    return {"exc": None}


def _new_order(total):
    return Order.create(
        owner_id="cust-001",
        items_data=[{"product_id": "prod-001", "name": "Tea Kettle", "quantity": 1, "unit_price": total}],
        shipping_address={
            "address": "12 MG Road",
            "city": "Bengaluru",
            "postal_code": "560001",
            "country": "India",
        },
        payment_method="razorpay",
        items_price=total,
        total_price=total,
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a pending order for {total:f}"), target_fixture="order")
def pending_order(total):
    order = _new_order(total)
    order._events.clear()
    return order


@given(parsers.cfparse('a payment intent "{provider_order_id}" was recorded'), target_fixture="order")
def intent_recorded(order, provider_order_id):
    order.record_payment_intent(provider_order_id, amount=int(order.total_price * 100), currency="INR")
    order._events.clear()
    return order


@given(parsers.cfparse('the order was paid with payment "{payment_id}"'), target_fixture="order")
def order_paid(order, payment_id):
    order.mark_paid(payment_id=payment_id, source=PaymentSource.CLIENT_VERIFICATION.value)
    order._events.clear()
    return order


@given(parsers.cfparse('the order was moved to "{status}"'), target_fixture="order")
def order_moved(order, status):
    order.change_status(status)
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order, status):
    assert order.status == status


@then("the order is paid")
def _(order):
    assert order.is_paid is True
    assert order.paid_at is not None


@then("the order is not paid")
def _(order):
    assert order.is_paid is False
    assert order.paid_at is None


@then("the order action fails with a validation error")
def _(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("an {event_type} order event is raised"))
def _(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"


@then(parsers.cfparse("a {event_type} order event is raised"))
def _(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"


@then(parsers.cfparse("no {event_type} order event is raised"))
def _(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert not any(isinstance(e, event_cls) for e in order._events)


@then("no order event is raised")
def _(order):
    assert order._events == []
