"""Order status templates: one per fulfilment status, plus a generic fallback."""


class OrderProcessingTemplate:
    status = "processing"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Processing",
            "message": f"Your order #{context['short_order_id']} is now being processed.",
        }


class OrderShippedTemplate:
    status = "shipped"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Shipped",
            "message": f"Your order #{context['short_order_id']} has been shipped.",
        }


class OrderDeliveredTemplate:
    status = "delivered"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Delivered",
            "message": f"Your order #{context['short_order_id']} has been delivered.",
        }


class OrderCancelledTemplate:
    status = "cancelled"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Cancelled",
            "message": f"Your order #{context['short_order_id']} has been cancelled.",
        }


class OrderUpdateTemplate:
    status = None

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Update",
            "message": (f"Your order #{context['short_order_id']} status has been updated to {context['status']}."),
        }
