"""FastAPI routes for the Notifications domain.

Thin adapters that translate HTTP requests into domain commands.
No business logic, only schema to command to response translation.
"""

from fastapi import APIRouter, Depends
from notifications.api.schemas import CreateNotificationRequest, notification_response
from notifications.notification.management import (
    CreateNotification,
    DeleteNotification,
    MarkAllNotificationsRead,
    MarkNotificationRead,
)
from notifications.notification.notification import Notification, NotificationCategory
from notifications.notification.queries import notifications_for, unread_count
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from shared.http import envelope
from shared.requester import Requester, get_requester, require_admin

router = APIRouter(prefix="/notifications", tags=["notifications"])

_CATEGORIES = {c.value for c in NotificationCategory}


@router.get("")
async def list_notifications(requester: Requester = Depends(get_requester)):
    """The requester's notifications, newest first."""
    items = notifications_for(requester.user_id)
    return envelope([notification_response(n) for n in items], count=len(items))


@router.get("/unread/count")
async def get_unread_count(requester: Requester = Depends(get_requester)):
    return envelope({"count": unread_count(requester.user_id)})


@router.put("/read-all")
async def mark_all_read(requester: Requester = Depends(get_requester)):
    updated = current_domain.process(
        MarkAllNotificationsRead(recipient_id=requester.user_id),
        asynchronous=False,
    )
    return envelope({"updated": updated}, message="All notifications marked as read")


@router.put("/{notification_id}/read")
async def mark_read(notification_id: str, requester: Requester = Depends(get_requester)):
    current_domain.process(
        MarkNotificationRead(
            notification_id=notification_id,
            requester_id=requester.user_id,
            requester_is_admin=requester.is_admin,
        ),
        asynchronous=False,
    )
    notification = current_domain.repository_for(Notification).get(notification_id)
    return envelope(notification_response(notification))


@router.delete("/{notification_id}")
async def delete_notification(notification_id: str, requester: Requester = Depends(get_requester)):
    current_domain.process(
        DeleteNotification(
            notification_id=notification_id,
            requester_id=requester.user_id,
            requester_is_admin=requester.is_admin,
        ),
        asynchronous=False,
    )
    return envelope(message="Notification removed")


@router.post("", status_code=201)
async def create_notification(body: CreateNotificationRequest, requester: Requester = Depends(require_admin)):
    """Create a notification for any user (administrators only)."""
    if body.type not in _CATEGORIES:
        raise ValidationError({"type": [f"Invalid notification type: {body.type}"]})

    notification_id = current_domain.process(
        CreateNotification(
            recipient_id=body.user_id,
            title=body.title,
            message=body.message,
            category=body.type,
            order_id=body.order_id,
        ),
        asynchronous=False,
    )
    notification = current_domain.repository_for(Notification).get(notification_id)
    return envelope(notification_response(notification), status_code=201)
