"""Razorpay adapter for the payment gateway port.

Creates remote orders through ``POST /orders`` of the Razorpay REST API.
Amounts are already in paise (minor units) when they reach this adapter.
"""

from datetime import UTC, datetime

import httpx
import structlog
from shared.errors import GatewayError

from payments.config import GatewaySettings
from payments.gateway.port import PaymentGateway, PaymentIntent

logger = structlog.get_logger(__name__)


class RazorpayGateway(PaymentGateway):
    def __init__(self, settings: GatewaySettings, transport: httpx.BaseTransport | None = None) -> None:
        super().__init__(settings)
        self._client = httpx.Client(
            base_url=settings.base_url,
            auth=(settings.key_id, settings.secret()),
            timeout=httpx.Timeout(settings.timeout, connect=min(settings.timeout, 5.0)),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def create_intent(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: dict | None = None,
    ) -> PaymentIntent:
        payload = {
            "amount": amount_minor,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        try:
            response = self._client.post("/orders", json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "razorpay_order_create_rejected",
                status_code=e.response.status_code,
                receipt=receipt,
                body=e.response.text[:500],
            )
            raise GatewayError("Payment gateway rejected the order") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("razorpay_order_create_failed", receipt=receipt, error=str(e))
            raise GatewayError() from e

        if not isinstance(body, dict) or not body.get("id"):
            logger.error("razorpay_order_create_malformed", receipt=receipt)
            raise GatewayError("Payment gateway returned an unexpected response")

        created_at = body.get("created_at")
        return PaymentIntent(
            remote_id=body["id"],
            amount=int(body.get("amount", amount_minor)),
            currency=body.get("currency", currency),
            receipt=body.get("receipt", receipt),
            status=body.get("status", "created"),
            created_at=datetime.fromtimestamp(created_at, UTC) if created_at else datetime.now(UTC),
            notes=body.get("notes") or {},
        )

    def close(self) -> None:
        self._client.close()
