"""Template registry: maps an order status to its notification template.

Each template renders a title and message from the order context.
"""

from notifications.templates.order_status import (
    OrderCancelledTemplate,
    OrderDeliveredTemplate,
    OrderProcessingTemplate,
    OrderShippedTemplate,
    OrderUpdateTemplate,
)

TEMPLATE_REGISTRY: dict[str, type] = {
    template.status: template
    for template in (
        OrderProcessingTemplate,
        OrderShippedTemplate,
        OrderDeliveredTemplate,
        OrderCancelledTemplate,
    )
}


def get_template(status: str | None):
    """Look up the template for an order status, falling back to the generic update."""
    return TEMPLATE_REGISTRY.get((status or "").lower(), OrderUpdateTemplate)


def render_order_status(order_id: str, status: str) -> dict:
    context = {"short_order_id": str(order_id)[:8], "status": status}
    return get_template(status).render(context)
