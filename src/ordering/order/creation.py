"""Order placement: command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    owner_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True, max_length=50)
    items_price = Float(default=0.0)
    tax_price = Float(default=0.0)
    shipping_price = Float(default=0.0)
    total_price = Float(default=0.0)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )

        order = Order.create(
            owner_id=command.owner_id,
            items_data=items_data,
            shipping_address=shipping_address,
            payment_method=command.payment_method,
            items_price=command.items_price,
            tax_price=command.tax_price,
            shipping_price=command.shipping_price,
            total_price=command.total_price,
        )

        # Totals come from the client and are kept as sent.
        mismatches = order.price_breakdown_mismatches()
        if mismatches:
            logger.warning(
                "order_price_breakdown_inconsistent",
                order_id=str(order.id),
                fields=mismatches,
                items_price=order.items_price,
                total_price=order.total_price,
            )

        current_domain.repository_for(Order).add(order)
        return str(order.id)
