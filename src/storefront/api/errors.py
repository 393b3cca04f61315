"""Map storefront and protean failures to JSON error responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.api.schemas import ErrorResponse
from storefront.domain import logger
from storefront.errors import (
    BadCredentials,
    ExternalServiceFailure,
    Forbidden,
    InsufficientStock,
    StorefrontError,
    Unauthenticated,
)

_STATUS_CODES = {
    Forbidden: 403,
    Unauthenticated: 401,
    BadCredentials: 401,
    InsufficientStock: 409,
    ExternalServiceFailure: 502,
}


def _body(code, message):
    return ErrorResponse(code=code, message=message).model_dump()


def _flatten(messages) -> str:
    """Render protean's ``{field: [messages]}`` payload as one line."""
    if isinstance(messages, dict):
        parts = []
        for field_name, errors in messages.items():
            errors = errors if isinstance(errors, (list, tuple)) else [errors]
            parts.append(f"{field_name}: {', '.join(str(e) for e in errors)}")
        return "; ".join(parts)
    return str(messages)


def _status_for(exc: StorefrontError) -> int:
    for error_class in type(exc).__mro__:
        if error_class in _STATUS_CODES:
            return _STATUS_CODES[error_class]
    return 400


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    return JSONResponse(status_code=_status_for(exc), content=_body(exc.code, exc.message))


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_body("NOT_FOUND", _flatten(exc.messages)))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_body("INVALID_ARGUMENT", _flatten(exc.messages)))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content=_body("INTERNAL_ERROR", "Internal server error."))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
