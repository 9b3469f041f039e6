"""HMAC-SHA256 signatures used for client confirmations and webhooks."""

import hashlib
import hmac


def sign(message, secret: str) -> str:
    """Hex digest of ``message`` (str or bytes) keyed with ``secret``."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def signatures_match(expected: str, provided: str | None) -> bool:
    if not provided:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), provided.strip().encode("utf-8"))


def payment_message(provider_order_id: str, provider_payment_id: str) -> str:
    return f"{provider_order_id}|{provider_payment_id}"
