"""FastAPI routes for payments: gateway checkout, verification and webhooks.

The handlers act on orders, so these routes run inside the ordering domain
context.
"""

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from ordering.api.schemas import order_response
from ordering.order.payment import (
    ConfirmClientPayment,
    RequestPaymentIntent,
    load_order,
    process_payment_command,
)
from ordering.order.queries import payment_status
from ordering.order.webhook import reconcile_webhook
from protean.utils.globals import current_domain
from shared.http import envelope
from shared.logging import current_env
from shared.requester import Requester, get_requester

from payments.api.schemas import (
    ConfigureGatewayRequest,
    CreatePaymentOrderRequest,
    GatewayConfigResponse,
    PaymentIntentResponse,
    PaymentResultResponse,
    PaymentStatusResponse,
    VerifyPaymentRequest,
)
from payments.gateway import get_gateway
from payments.gateway.fake_adapter import FakeGateway

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/create-order")
def create_payment_order(body: CreatePaymentOrderRequest, requester: Requester = Depends(get_requester)):
    """Create a gateway order for the requester's order and return the checkout details.

    A plain ``def`` so the blocking gateway call runs in the threadpool.
    """
    intent = current_domain.process(
        RequestPaymentIntent(order_id=body.order_id, requester_id=requester.user_id),
        asynchronous=False,
    )
    return envelope(PaymentIntentResponse(**intent).model_dump(by_alias=True, mode="json"))


@payment_router.post("/verify")
async def verify_payment(body: VerifyPaymentRequest, requester: Requester = Depends(get_requester)):
    """Verify the checkout signature and mark the order paid."""
    process_payment_command(
        ConfirmClientPayment(
            order_id=body.order_id,
            provider_order_id=body.provider_order_id,
            provider_payment_id=body.provider_payment_id,
            signature=body.signature,
        )
    )
    return envelope(order_response(load_order(body.order_id)), message="Payment verified successfully")


@payment_router.post("/webhook")
async def payment_webhook(request: Request, x_razorpay_signature: str | None = Header(default=None)):
    """Reconcile a gateway event. Authenticated by signature, not by user."""
    raw = await request.body()
    outcome = reconcile_webhook(raw, x_razorpay_signature)
    return envelope(received=True, outcome=outcome)


@payment_router.get("/{order_id}/status")
async def get_payment_status(order_id: str, requester: Requester = Depends(get_requester)):
    status = payment_status(order_id, requester.user_id, requester.is_admin)
    result = status["payment_result"]
    response = PaymentStatusResponse(
        order_id=status["order_id"],
        is_paid=bool(status["is_paid"]),
        paid_at=status["paid_at"],
        payment_method=status["payment_method"],
        payment_result=(
            PaymentResultResponse(
                stage=result.stage,
                provider_order_id=result.provider_order_id,
                payment_id=result.payment_id,
                status=result.provider_status,
                payer_email=result.payer_email,
                completed_at=result.completed_at,
            )
            if result
            else None
        ),
    )
    return envelope(response.model_dump(by_alias=True, mode="json"))


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    Unavailable when the environment (STOREFRONT_ENV or PROTEAN_ENV) is production.
    It allows toggling success/failure behavior for manual API testing.
    """
    if current_env() == "production":
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )
