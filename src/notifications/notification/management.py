"""Notification management: commands and handler.

Only the recipient or an administrator may mark read or delete a
notification. Creating one directly is an administrator action; order
status notifications come in through the emitter.
"""

from notifications.domain import notifications
from notifications.notification.notification import Notification
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.errors import NotFound, Unauthorized


@notifications.command(part_of="Notification")
class CreateNotification:
    recipient_id: Identifier(required=True)
    title: String(required=True, max_length=200)
    message: Text(required=True)
    category: String(max_length=20)
    order_id: Identifier()


@notifications.command(part_of="Notification")
class MarkNotificationRead:
    notification_id: Identifier(required=True)
    requester_id: Identifier(required=True)
    requester_is_admin: Boolean(default=False)


@notifications.command(part_of="Notification")
class MarkAllNotificationsRead:
    recipient_id: Identifier(required=True)


@notifications.command(part_of="Notification")
class DeleteNotification:
    notification_id: Identifier(required=True)
    requester_id: Identifier(required=True)
    requester_is_admin: Boolean(default=False)


def _load_for(notification_id, requester_id, requester_is_admin) -> Notification:
    try:
        notification = current_domain.repository_for(Notification).get(notification_id)
    except ObjectNotFoundError as e:
        raise NotFound("Notification not found") from e
    if not (requester_is_admin or notification.is_addressed_to(requester_id)):
        raise Unauthorized("Not authorized to access this notification")
    return notification


@notifications.command_handler(part_of=Notification)
class NotificationManagementHandler:
    @handle(CreateNotification)
    def create_notification(self, command: CreateNotification):
        notification = Notification.create(
            recipient_id=command.recipient_id,
            title=command.title,
            message=command.message,
            category=command.category,
            order_id=command.order_id,
        )
        current_domain.repository_for(Notification).add(notification)
        return str(notification.id)

    @handle(MarkNotificationRead)
    def mark_read(self, command: MarkNotificationRead):
        notification = _load_for(command.notification_id, command.requester_id, command.requester_is_admin)
        if notification.mark_read():
            current_domain.repository_for(Notification).add(notification)
        return str(notification.id)

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command: MarkAllNotificationsRead):
        repo = current_domain.repository_for(Notification)
        unread = repo._dao.query.filter(recipient_id=command.recipient_id, is_read=False).all().items
        for notification in unread:
            notification.mark_read()
            repo.add(notification)
        return len(unread)

    @handle(DeleteNotification)
    def delete_notification(self, command: DeleteNotification):
        notification = _load_for(command.notification_id, command.requester_id, command.requester_is_admin)
        current_domain.repository_for(Notification)._dao.delete(notification)
        return str(notification.id)
