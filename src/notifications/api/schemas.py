"""Pydantic request/response models for the Notifications API.

API schemas are separate from Protean commands (anti-corruption pattern).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class CreateNotificationRequest(CamelModel):
    user_id: str = Field(..., description="Recipient of the notification")
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    type: str = Field(default="other", examples=["order", "account", "promotion", "other"])
    order_id: str | None = None


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class NotificationResponse(CamelModel):
    id: str
    user_id: str
    title: str
    message: str
    type: str
    order_id: str | None = None
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime | None = None


def notification_response(notification) -> dict:
    return NotificationResponse(
        id=str(notification.id),
        user_id=str(notification.recipient_id),
        title=notification.title,
        message=notification.message,
        type=notification.category,
        order_id=str(notification.order_id) if notification.order_id else None,
        is_read=bool(notification.is_read),
        read_at=notification.read_at,
        created_at=notification.created_at,
    ).model_dump(by_alias=True, mode="json")
