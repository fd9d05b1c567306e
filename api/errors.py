"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from core.exceptions import (
    InvalidInvoiceStateError,
    InvalidPaymentAmountError,
    NoMatchingInvoiceError,
)

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _error(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message, _request_id(request)).model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(NoMatchingInvoiceError)
    async def no_matching_invoice_handler(request: Request, exc: NoMatchingInvoiceError):
        return _error(request, 404, ErrorCodes.NOT_FOUND, str(exc))

    @app.exception_handler(InvalidInvoiceStateError)
    async def invalid_invoice_state_handler(request: Request, exc: InvalidInvoiceStateError):
        logger.error("Corrupt invoice %s: %s", exc.reference, exc)
        return _error(request, 409, ErrorCodes.INVALID_INVOICE_STATE, str(exc))

    @app.exception_handler(InvalidPaymentAmountError)
    async def invalid_payment_amount_handler(request: Request, exc: InvalidPaymentAmountError):
        return _error(request, 400, ErrorCodes.INVALID_PAYMENT_AMOUNT, str(exc))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return _error(request, 404, ErrorCodes.NOT_FOUND, message)
        return _error(request, 400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _error(request, 500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
