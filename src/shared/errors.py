"""Application error taxonomy shared by the ordering, payments and notifications packages.

Input validation failures use protean's ``ValidationError`` like the rest of
the domain code. The classes here cover the remaining outcomes that the HTTP
boundary needs to tell apart.
"""


class StorefrontError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Not found"


class Unauthorized(StorefrontError):
    status_code = 401
    default_message = "Not authorized"


class InvalidSignature(StorefrontError):
    status_code = 400
    default_message = "Invalid signature"


class InvalidAmount(StorefrontError):
    status_code = 400
    default_message = "Order amount must be greater than 0"


class ConfigurationError(StorefrontError):
    """Payment gateway credentials or settings are missing."""

    status_code = 500
    default_message = "Payment gateway is not configured"


class GatewayError(StorefrontError):
    """The remote payment gateway failed or could not be reached."""

    status_code = 502
    default_message = "Payment gateway error"
