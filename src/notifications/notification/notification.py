"""Notification aggregate: a message shown to one user in the storefront.

State is a single flag: unread until the recipient (or an administrator)
marks it read. Marking an already-read notification read again keeps the
original ``read_at``.
"""

from datetime import UTC, datetime
from enum import Enum

from notifications.domain import notifications
from notifications.notification.events import NotificationCreated, NotificationRead
from protean.fields import Boolean, DateTime, Identifier, String, Text


class NotificationCategory(Enum):
    ORDER = "order"
    ACCOUNT = "account"
    PROMOTION = "promotion"
    OTHER = "other"


@notifications.aggregate
class Notification:
    """A single in-app notification addressed to a user."""

    recipient_id: Identifier(required=True)
    title: String(required=True, max_length=200)
    message: Text(required=True)
    category: String(choices=NotificationCategory, default=NotificationCategory.OTHER.value)

    # Related order, for order status notifications
    order_id: Identifier()

    is_read: Boolean(default=False)
    read_at: DateTime()
    created_at: DateTime()

    @classmethod
    def create(cls, recipient_id, title, message, category=NotificationCategory.OTHER.value, order_id=None):
        now = datetime.now(UTC)
        notification = cls(
            recipient_id=recipient_id,
            title=title,
            message=message,
            category=category or NotificationCategory.OTHER.value,
            order_id=order_id,
            is_read=False,
            created_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient_id=str(recipient_id),
                category=notification.category,
                title=title,
                order_id=str(order_id) if order_id else None,
                created_at=now,
            )
        )
        return notification

    def is_addressed_to(self, user_id) -> bool:
        return str(self.recipient_id) == str(user_id)

    def mark_read(self) -> bool:
        """Mark as read. Returns False when it already was."""
        if self.is_read:
            return False

        now = datetime.now(UTC)
        self.is_read = True
        self.read_at = now
        self.raise_(
            NotificationRead(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                read_at=now,
            )
        )
        return True
