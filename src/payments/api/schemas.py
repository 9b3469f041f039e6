"""Pydantic request/response schemas for the Payments API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. Field names follow Razorpay's checkout handler
(``razorpay_order_id`` ...) with camelCase accepted as well.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreatePaymentOrderRequest(CamelModel):
    order_id: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"orderId": "2f0c6a8e-1c55-4d7e-9a0e-3f1a2b4c5d6e"}]},
    )


class VerifyPaymentRequest(CamelModel):
    order_id: str
    provider_order_id: str = Field(
        validation_alias=AliasChoices("razorpay_order_id", "razorpayOrderId", "providerOrderId", "provider_order_id")
    )
    provider_payment_id: str = Field(
        validation_alias=AliasChoices(
            "razorpay_payment_id", "razorpayPaymentId", "providerPaymentId", "provider_payment_id"
        )
    )
    signature: str = Field(
        validation_alias=AliasChoices("razorpay_signature", "razorpaySignature", "signature")
    )


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Gateway unavailable"


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PaymentIntentResponse(CamelModel):
    provider_order_id: str
    amount: int
    currency: str
    receipt: str
    status: str
    created_at: datetime
    key_id: str


class PaymentResultResponse(CamelModel):
    stage: str
    provider_order_id: str | None = None
    payment_id: str | None = None
    status: str | None = None
    payer_email: str | None = None
    completed_at: datetime | None = None


class PaymentStatusResponse(CamelModel):
    order_id: str
    is_paid: bool
    paid_at: datetime | None = None
    payment_method: str | None = None
    payment_result: PaymentResultResponse | None = None


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
