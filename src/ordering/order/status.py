"""Order status updates: command, handler and the post-commit notification hook."""

import structlog
from notifications.notification.helpers import notify_order_status
from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain
from shared.errors import Unauthorized

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus
from ordering.order.payment import load_order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    new_status = String(required=True, max_length=20)
    requester_is_admin = Boolean(default=False)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        if not command.requester_is_admin:
            raise Unauthorized("Not authorized as an admin")

        order = load_order(command.order_id)
        previous = order.change_status(command.new_status)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_status_updated",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
        )
        return {
            "order_id": str(order.id),
            "owner_id": str(order.owner_id),
            "previous_status": previous,
            "new_status": order.status,
        }


def change_order_status(order_id, new_status, requester_is_admin=False) -> dict:
    """Update the status, then notify the owner if it actually changed.

    The notification runs after the order has been persisted and cannot
    fail the update.
    """
    result = current_domain.process(
        UpdateOrderStatus(
            order_id=order_id,
            new_status=new_status,
            requester_is_admin=requester_is_admin,
        ),
        asynchronous=False,
    )

    result["notification_id"] = None
    if result["previous_status"] != result["new_status"]:
        result["notification_id"] = notify_order_status(
            owner_id=result["owner_id"],
            order_id=result["order_id"],
            status=result["new_status"],
        )
    return result


def mark_delivered(order_id, requester_is_admin=False) -> dict:
    return change_order_status(order_id, OrderStatus.DELIVERED.value, requester_is_admin=requester_is_admin)


def resend_status_notification(order_id, requester_is_admin=False) -> str | None:
    """Emit the notification for the order's current status again."""
    if not requester_is_admin:
        raise Unauthorized("Not authorized as an admin")
    order = load_order(order_id)
    return notify_order_status(owner_id=order.owner_id, order_id=str(order.id), status=order.status)
