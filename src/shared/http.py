"""Response envelope and exception mapping for the FastAPI routers.

Every route answers ``{"success": bool, "data"?: ..., "message"?: str}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from shared.errors import StorefrontError

logger = structlog.get_logger(__name__)


def envelope(data=None, status_code: int = 200, **extra) -> JSONResponse:
    content = {"success": True}
    if data is not None:
        content["data"] = data
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def failure(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def validation_message(exc: ValidationError) -> str:
    """Flatten protean's ``{field: [messages]}`` into one readable line."""
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        parts = []
        for value in messages.values():
            if isinstance(value, (list, tuple)):
                parts.extend(str(v) for v in value)
            else:
                parts.append(str(value))
        if parts:
            return "; ".join(parts)
    return str(exc) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def _storefront_error(request: Request, exc: StorefrontError):
        if exc.status_code >= 500:
            logger.error(
                "request_failed",
                path=request.url.path,
                error_type=type(exc).__name__,
                error=exc.message,
            )
        return failure(exc.message, exc.status_code)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return failure(validation_message(exc), 400)

    @app.exception_handler(ObjectNotFoundError)
    async def _not_found(request: Request, exc: ObjectNotFoundError):
        return failure("Not found", 404)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return failure(message, 400)

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path, error_type=type(exc).__name__)
        return failure("Server Error", 500)
