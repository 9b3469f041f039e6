"""Pydantic request/response schemas for the Orders API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. The wire format is camelCase; snake_case is
accepted on input as well.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(CamelModel):
    name: str | None = None
    address: str
    city: str
    state: str | None = None
    postal_code: str
    country: str
    email: str | None = None
    phone: str | None = None


class OrderItemSchema(CamelModel):
    product_id: str = Field(validation_alias=AliasChoices("productId", "product_id", "product"))
    name: str
    quantity: int = Field(ge=1, validation_alias=AliasChoices("quantity", "qty"))
    unit_price: float = Field(ge=0, validation_alias=AliasChoices("unitPrice", "unit_price", "price"))
    image: str | None = None


class PaymentResultSchema(CamelModel):
    stage: str
    provider_order_id: str | None = None
    payment_id: str | None = None
    signature: str | None = None
    status: str | None = None
    payer_email: str | None = None
    completed_at: datetime | None = None


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(CamelModel):
    order_items: list[OrderItemSchema] = Field(default_factory=list)
    shipping_address: AddressSchema
    payment_method: str
    items_price: float = Field(default=0.0, ge=0)
    tax_price: float = Field(default=0.0, ge=0)
    shipping_price: float = Field(default=0.0, ge=0)
    total_price: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "orderItems": [{"product": "prod-001", "name": "Tea Kettle", "qty": 2, "price": 499.5}],
                    "shippingAddress": {
                        "address": "12 MG Road",
                        "city": "Bengaluru",
                        "postalCode": "560001",
                        "country": "India",
                    },
                    "paymentMethod": "razorpay",
                    "itemsPrice": 999.0,
                    "taxPrice": 0.0,
                    "shippingPrice": 40.0,
                    "totalPrice": 1039.0,
                }
            ]
        },
    )


class PayerSchema(CamelModel):
    email_address: str | None = None


class RecordPaymentRequest(CamelModel):
    id: str
    status: str | None = None
    update_time: datetime | None = None
    payer: PayerSchema | None = None


class UpdateStatusRequest(CamelModel):
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderResponse(CamelModel):
    id: str
    owner_id: str
    order_items: list[OrderItemSchema]
    shipping_address: AddressSchema | None = None
    payment_method: str | None = None
    items_price: float
    tax_price: float
    shipping_price: float
    total_price: float
    status: str
    is_paid: bool
    paid_at: datetime | None = None
    is_delivered: bool
    delivered_at: datetime | None = None
    payment_result: PaymentResultSchema | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StatusChangeResponse(CamelModel):
    order_id: str
    previous_status: str
    status: str
    notification_id: str | None = None


def payment_result_response(result) -> PaymentResultSchema | None:
    if result is None:
        return None
    return PaymentResultSchema(
        stage=result.stage,
        provider_order_id=result.provider_order_id,
        payment_id=result.payment_id,
        signature=result.signature,
        status=result.provider_status,
        payer_email=result.payer_email,
        completed_at=result.completed_at,
    )


def order_response(order) -> dict:
    """Serialize an Order aggregate to its camelCase wire form."""
    address = order.shipping_address
    return OrderResponse(
        id=str(order.id),
        owner_id=str(order.owner_id),
        order_items=[
            OrderItemSchema(
                product_id=str(item.product_id),
                name=item.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                image=item.image,
            )
            for item in order.items
        ],
        shipping_address=(
            AddressSchema(
                name=address.name,
                address=address.address,
                city=address.city,
                state=address.state,
                postal_code=address.postal_code,
                country=address.country,
                email=address.email,
                phone=address.phone,
            )
            if address
            else None
        ),
        payment_method=order.payment_method,
        items_price=order.items_price or 0.0,
        tax_price=order.tax_price or 0.0,
        shipping_price=order.shipping_price or 0.0,
        total_price=order.total_price or 0.0,
        status=order.status,
        is_paid=bool(order.is_paid),
        paid_at=order.paid_at,
        is_delivered=bool(order.is_delivered),
        delivered_at=order.delivered_at,
        payment_result=payment_result_response(order.payment_result),
        created_at=order.created_at,
        updated_at=order.updated_at,
    ).model_dump(by_alias=True, mode="json")
