"""Tests for the Notification aggregate."""

import pytest
from notifications.notification.events import NotificationCreated, NotificationRead
from notifications.notification.notification import Notification, NotificationCategory
from protean.exceptions import ValidationError


def _make_notification(**overrides):
    defaults = {
        "recipient_id": "cust-001",
        "title": "Order Shipped",
        "message": "Your order #1a2b3c4d has been shipped.",
        "category": NotificationCategory.ORDER.value,
        "order_id": "1a2b3c4d-0000-0000-0000-000000000000",
    }
    defaults.update(overrides)
    return Notification.create(**defaults)


class TestNotificationCreation:
    def test_create_sets_id(self):
        n = _make_notification()
        assert n.id is not None

    def test_create_sets_recipient(self):
        n = _make_notification(recipient_id="cust-123")
        assert str(n.recipient_id) == "cust-123"

    def test_new_notification_is_unread(self):
        n = _make_notification()
        assert n.is_read is False
        assert n.read_at is None

    def test_create_stamps_created_at(self):
        assert _make_notification().created_at is not None

    def test_category_defaults_to_other(self):
        n = _make_notification(category=None)
        assert n.category == NotificationCategory.OTHER.value

    def test_order_reference_is_optional(self):
        n = _make_notification(category=NotificationCategory.PROMOTION.value, order_id=None)
        assert n.order_id is None

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            _make_notification(category="spam")

    def test_title_required(self):
        with pytest.raises(ValidationError):
            _make_notification(title=None)

    def test_create_raises_created_event(self):
        n = _make_notification()
        assert len(n._events) == 1
        event = n._events[0]
        assert isinstance(event, NotificationCreated)
        assert event.notification_id == str(n.id)
        assert event.category == NotificationCategory.ORDER.value


class TestNotificationAddressing:
    def test_addressed_to_recipient(self):
        assert _make_notification(recipient_id="cust-9").is_addressed_to("cust-9") is True

    def test_not_addressed_to_someone_else(self):
        assert _make_notification(recipient_id="cust-9").is_addressed_to("cust-10") is False


class TestMarkRead:
    def test_mark_read(self):
        n = _make_notification()
        n._events.clear()

        assert n.mark_read() is True
        assert n.is_read is True
        assert n.read_at is not None
        assert isinstance(n._events[0], NotificationRead)

    def test_mark_read_twice_keeps_first_timestamp(self):
        n = _make_notification()
        n.mark_read()
        first = n.read_at
        n._events.clear()

        assert n.mark_read() is False
        assert n.read_at == first
        assert n._events == []
