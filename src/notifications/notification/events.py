"""Domain events for the Notification aggregate."""

from notifications.domain import notifications
from protean.fields import DateTime, Identifier, String


@notifications.event(part_of="Notification")
class NotificationCreated:
    """A notification was created for a recipient."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    category: String(required=True)
    title: String(required=True)
    order_id: Identifier()
    created_at: DateTime(required=True)


@notifications.event(part_of="Notification")
class NotificationRead:
    """The recipient (or an administrator) marked the notification as read."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    read_at: DateTime(required=True)
