"""Tests for order reads and the owner-or-admin access rule."""

import json

import pytest
from ordering.order.creation import PlaceOrder
from ordering.order.order import PaymentStage
from ordering.order.payment import RecordExternalPayment, RequestPaymentIntent, process_payment_command
from ordering.order.queries import all_orders, get_order, orders_for_owner, payment_status
from protean import current_domain
from shared.errors import NotFound, Unauthorized


def _place(owner_id, total=120.0):
    return current_domain.process(
        PlaceOrder(
            owner_id=owner_id,
            items=json.dumps([{"product_id": "p5", "name": "Mug", "quantity": 1, "unit_price": total}]),
            shipping_address=json.dumps(
                {"address": "2 Beach Rd", "city": "Chennai", "postal_code": "600001", "country": "India"}
            ),
            payment_method="razorpay",
            items_price=total,
            total_price=total,
        ),
        asynchronous=False,
    )


class TestGetOrder:
    def test_owner_can_read(self):
        order_id = _place("user-a")

        assert str(get_order(order_id, "user-a").id) == order_id

    def test_admin_can_read_any(self):
        order_id = _place("user-a")

        assert str(get_order(order_id, "admin-1", requester_is_admin=True).id) == order_id

    def test_other_user_is_refused(self):
        order_id = _place("user-a")

        with pytest.raises(Unauthorized):
            get_order(order_id, "user-b")

    def test_missing_order(self):
        with pytest.raises(NotFound):
            get_order("does-not-exist", "user-a")


class TestListing:
    def test_orders_for_owner_only_returns_their_orders(self):
        mine = {_place("user-a"), _place("user-a")}
        _place("user-b")

        assert {str(o.id) for o in orders_for_owner("user-a")} == mine

    def test_orders_for_owner_newest_first(self):
        _place("user-a")
        _place("user-a")

        orders = orders_for_owner("user-a")

        assert orders[0].created_at >= orders[1].created_at

    def test_all_orders_for_admin(self):
        _place("user-a")
        _place("user-b")

        assert len(all_orders(requester_is_admin=True)) == 2

    def test_all_orders_refused_for_customers(self):
        with pytest.raises(Unauthorized):
            all_orders()


class TestPaymentStatus:
    def test_unpaid_order_without_intent(self):
        order_id = _place("user-a")

        status = payment_status(order_id, "user-a")

        assert status["order_id"] == order_id
        assert status["is_paid"] is False
        assert status["paid_at"] is None
        assert status["payment_result"] is None

    def test_after_intent_and_payment(self):
        order_id = _place("user-a")
        current_domain.process(RequestPaymentIntent(order_id=order_id, requester_id="user-a"), asynchronous=False)
        created = payment_status(order_id, "user-a")["payment_result"]

        process_payment_command(RecordExternalPayment(order_id=order_id, payment_id="PAY-9"))
        status = payment_status(order_id, "user-a")

        assert created.stage == PaymentStage.CREATED.value
        assert status["is_paid"] is True
        assert status["payment_result"].stage == PaymentStage.COMPLETED.value
        assert status["payment_result"].payment_id == "PAY-9"

    def test_refused_for_other_user(self):
        order_id = _place("user-a")

        with pytest.raises(Unauthorized):
            payment_status(order_id, "user-b")
