"""FastAPI routes for the Ordering domain: orders."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain
from shared.http import envelope
from shared.requester import Requester, get_requester, require_admin

from ordering.api.schemas import (
    CreateOrderRequest,
    RecordPaymentRequest,
    StatusChangeResponse,
    UpdateStatusRequest,
    order_response,
)
from ordering.order.creation import PlaceOrder
from ordering.order.payment import RecordExternalPayment, load_order, process_payment_command
from ordering.order.queries import all_orders, get_order, orders_for_owner
from ordering.order.status import change_order_status, mark_delivered, resend_status_notification

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _status_change(result: dict) -> dict:
    return StatusChangeResponse(
        order_id=result["order_id"],
        previous_status=result["previous_status"],
        status=result["new_status"],
        notification_id=result.get("notification_id"),
    ).model_dump(by_alias=True)


@order_router.post("", status_code=201)
async def create_order(body: CreateOrderRequest, requester: Requester = Depends(get_requester)):
    """Place an order for the requesting user."""
    command = PlaceOrder(
        owner_id=requester.user_id,
        items=json.dumps([item.model_dump() for item in body.order_items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_method,
        items_price=body.items_price,
        tax_price=body.tax_price,
        shipping_price=body.shipping_price,
        total_price=body.total_price,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return envelope(order_response(load_order(order_id)), status_code=201)


@order_router.get("")
async def list_orders(requester: Requester = Depends(require_admin)):
    """All orders, newest first (administrators only)."""
    orders = all_orders(requester_is_admin=requester.is_admin)
    return envelope([order_response(o) for o in orders], count=len(orders))


@order_router.get("/mine")
async def list_my_orders(requester: Requester = Depends(get_requester)):
    orders = orders_for_owner(requester.user_id)
    return envelope([order_response(o) for o in orders], count=len(orders))


@order_router.get("/{order_id}")
async def get_order_by_id(order_id: str, requester: Requester = Depends(get_requester)):
    order = get_order(order_id, requester.user_id, requester.is_admin)
    return envelope(order_response(order))


@order_router.put("/{order_id}/pay")
async def record_payment(order_id: str, body: RecordPaymentRequest, requester: Requester = Depends(require_admin)):
    """Record a payment taken outside the gateway checkout."""
    process_payment_command(
        RecordExternalPayment(
            order_id=order_id,
            payment_id=body.id,
            provider_status=body.status,
            update_time=body.update_time,
            payer_email=body.payer.email_address if body.payer else None,
        )
    )
    return envelope(order_response(load_order(order_id)))


@order_router.put("/{order_id}/deliver")
async def deliver_order(order_id: str, requester: Requester = Depends(require_admin)):
    result = mark_delivered(order_id, requester_is_admin=requester.is_admin)
    return envelope(order_response(load_order(result["order_id"])))


@order_router.put("/{order_id}/status")
async def update_order_status(order_id: str, body: UpdateStatusRequest, requester: Requester = Depends(require_admin)):
    result = change_order_status(order_id, body.status, requester_is_admin=requester.is_admin)
    return envelope(
        order_response(load_order(result["order_id"])),
        statusChange=_status_change(result),
    )


@order_router.post("/{order_id}/notifications", status_code=201)
async def resend_notification(order_id: str, requester: Requester = Depends(require_admin)):
    """Emit the current status notification to the order's owner again."""
    notification_id = resend_status_notification(order_id, requester_is_admin=requester.is_admin)
    if notification_id is None:
        return envelope(status_code=201, message="Notification could not be created")
    return envelope({"notificationId": notification_id}, status_code=201)
