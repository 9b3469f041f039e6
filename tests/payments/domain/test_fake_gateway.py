"""Tests for the in-memory FakeGateway."""

import pytest
from payments.gateway.fake_adapter import FakeGateway
from shared.errors import GatewayError


class TestFakeGateway:
    def test_creates_intent_with_requested_amount(self):
        gateway = FakeGateway()
        intent = gateway.create_intent(2500, "INR", "ord-1", {"orderId": "ord-1"})

        assert intent.remote_id.startswith("order_fake_")
        assert intent.amount == 2500
        assert intent.currency == "INR"
        assert intent.receipt == "ord-1"
        assert intent.status == "created"

    def test_each_intent_has_a_new_id(self):
        gateway = FakeGateway()
        first = gateway.create_intent(100, "INR", "ord-1")
        second = gateway.create_intent(100, "INR", "ord-1")
        assert first.remote_id != second.remote_id

    def test_records_calls(self):
        gateway = FakeGateway()
        gateway.create_intent(100, "INR", "ord-1", {"userId": "u1"})
        assert gateway.calls == [
            {
                "method": "create_intent",
                "amount": 100,
                "currency": "INR",
                "receipt": "ord-1",
                "notes": {"userId": "u1"},
            }
        ]

    def test_configured_failure_raises_gateway_error(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Down for maintenance")
        with pytest.raises(GatewayError) as exc_info:
            gateway.create_intent(100, "INR", "ord-1")
        assert exc_info.value.message == "Down for maintenance"

    def test_has_default_test_credentials(self):
        gateway = FakeGateway()
        assert gateway.key_id == "rzp_test_fake"
        assert gateway.currency == "INR"
        assert gateway.webhook_secret_configured is True
