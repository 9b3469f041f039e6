"""Read-side access to orders, with the owner-or-admin rule applied."""

from protean.utils.globals import current_domain
from shared.errors import Unauthorized

from ordering.order.order import Order
from ordering.order.payment import load_order


def get_order(order_id, requester_id, requester_is_admin=False) -> Order:
    order = load_order(order_id)
    if not (requester_is_admin or order.is_owned_by(requester_id)):
        raise Unauthorized("Not authorized to view this order")
    return order


def orders_for_owner(owner_id) -> list[Order]:
    return current_domain.repository_for(Order).find_for_owner(owner_id)


def all_orders(requester_is_admin=False) -> list[Order]:
    if not requester_is_admin:
        raise Unauthorized("Not authorized as an admin")
    return current_domain.repository_for(Order).find_all()


def payment_status(order_id, requester_id, requester_is_admin=False) -> dict:
    order = get_order(order_id, requester_id, requester_is_admin)
    return {
        "order_id": str(order.id),
        "is_paid": order.is_paid,
        "paid_at": order.paid_at,
        "payment_method": order.payment_method,
        "payment_result": order.payment_result,
    }
