"""Read-side helpers for the notifications API."""

from notifications.notification.notification import Notification
from protean.utils.globals import current_domain


def notifications_for(recipient_id) -> list[Notification]:
    """A user's notifications, newest first."""
    repo = current_domain.repository_for(Notification)
    items = repo._dao.query.filter(recipient_id=recipient_id).all().items
    return sorted(items, key=lambda n: n.created_at, reverse=True)


def unread_count(recipient_id) -> int:
    repo = current_domain.repository_for(Notification)
    return repo._dao.query.filter(recipient_id=recipient_id, is_read=False).all().total
