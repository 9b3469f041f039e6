"""Application tests for placing orders."""

import json

import pytest
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order, OrderStatus
from protean import current_domain
from protean.exceptions import ValidationError

ITEMS = [{"product_id": "prod-kettle", "name": "Tea Kettle", "quantity": 2, "unit_price": 499.5}]
ADDRESS = {"address": "12 MG Road", "city": "Bengaluru", "postal_code": "560001", "country": "India"}


def _place(**overrides):
    values = {
        "owner_id": "user-001",
        "items": json.dumps(ITEMS),
        "shipping_address": json.dumps(ADDRESS),
        "payment_method": "razorpay",
        "items_price": 999.0,
        "shipping_price": 40.0,
        "total_price": 1039.0,
    }
    values.update(overrides)
    return current_domain.process(PlaceOrder(**values), asynchronous=False)


class TestPlaceOrder:
    def test_persists_pending_order(self):
        order_id = _place()
        order = current_domain.repository_for(Order).get(order_id)

        assert str(order.owner_id) == "user-001"
        assert order.status == OrderStatus.PENDING.value
        assert order.is_paid is False
        assert order.is_delivered is False
        assert order.total_price == 1039.0
        assert len(order.items) == 1

    def test_stores_order_placed_event(self):
        order_id = _place()
        messages = current_domain.event_store.store.read("ordering::order")
        placed = [
            m
            for m in messages
            if m.metadata and m.metadata.headers and m.metadata.headers.type == "Ordering.OrderPlaced.v1"
        ]
        assert len(placed) == 1

    def test_empty_items_are_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _place(items="[]")
        assert exc_info.value.messages == {"order_items": ["No order items"]}

    def test_nothing_is_stored_for_rejected_order(self):
        with pytest.raises(ValidationError):
            _place(items="[]")
        assert current_domain.repository_for(Order).find_all() == []

    def test_inconsistent_totals_are_kept_as_sent(self):
        order_id = _place(total_price=5.0)
        order = current_domain.repository_for(Order).get(order_id)
        assert order.total_price == 5.0
