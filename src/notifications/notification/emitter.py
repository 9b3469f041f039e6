"""Best-effort notification emitter.

Callers in other bounded contexts invoke ``emit`` after their own change is
committed. It pushes the notifications domain context, creates the
notification, and never raises: failures are logged and reported as None.
"""

import structlog
from notifications.domain import notifications
from notifications.notification.management import CreateNotification
from notifications.notification.notification import NotificationCategory

logger = structlog.get_logger(__name__)


def emit(recipient_id, title, message, category=NotificationCategory.OTHER.value, order_id=None) -> str | None:
    """Create a notification for ``recipient_id``.

    Returns the new notification id, or None when creation failed.
    """
    try:
        with notifications.domain_context():
            return notifications.process(
                CreateNotification(
                    recipient_id=str(recipient_id),
                    title=title,
                    message=message,
                    category=category,
                    order_id=str(order_id) if order_id else None,
                ),
                asynchronous=False,
            )
    except Exception:
        logger.exception(
            "notification_emit_failed",
            recipient_id=str(recipient_id),
            order_id=str(order_id) if order_id else None,
            title=title,
        )
        return None
