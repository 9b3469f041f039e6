"""Shared helpers for notifications raised by other contexts."""

import structlog
from notifications.notification.emitter import emit
from notifications.notification.notification import NotificationCategory
from notifications.templates import render_order_status

logger = structlog.get_logger(__name__)


def notify_order_status(owner_id, order_id, status) -> str | None:
    """Tell the order's owner that its status changed.

    Returns the notification id, or None when emission failed.
    """
    try:
        rendered = render_order_status(order_id, status)
    except Exception:
        logger.exception("order_status_template_failed", order_id=str(order_id), status=status)
        return None

    return emit(
        recipient_id=owner_id,
        title=rendered["title"],
        message=rendered["message"],
        category=NotificationCategory.ORDER.value,
        order_id=order_id,
    )
