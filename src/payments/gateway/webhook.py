"""Parsing of Razorpay webhook bodies.

Only the fields needed for reconciliation are extracted: the event name, and
for payment events the payment id, the remote order id and the amount.
"""

import json
from dataclasses import dataclass

from protean.exceptions import ValidationError

CAPTURE_EVENTS = frozenset({"payment.captured", "order.paid"})


@dataclass(frozen=True)
class WebhookEvent:
    event: str
    payment_id: str | None = None
    provider_order_id: str | None = None
    amount: int | None = None
    payer_email: str | None = None

    @property
    def is_capture(self) -> bool:
        return self.event in CAPTURE_EVENTS


def parse_webhook_event(raw: bytes) -> WebhookEvent:
    try:
        body = json.loads(raw or b"")
    except (TypeError, ValueError) as e:
        raise ValidationError({"payload": ["Webhook payload is not valid JSON"]}) from e

    if not isinstance(body, dict) or not isinstance(body.get("event"), str):
        raise ValidationError({"payload": ["Webhook payload has no event name"]})

    payload = body.get("payload")
    if not isinstance(payload, dict):
        payload = {}
    payment = _entity(payload, "payment")
    order = _entity(payload, "order")

    return WebhookEvent(
        event=body["event"],
        payment_id=payment.get("id"),
        provider_order_id=payment.get("order_id") or order.get("id"),
        amount=payment.get("amount"),
        payer_email=payment.get("email"),
    )


def _entity(payload: dict, name: str) -> dict:
    wrapper = payload.get(name)
    entity = wrapper.get("entity") if isinstance(wrapper, dict) else None
    return entity if isinstance(entity, dict) else {}
