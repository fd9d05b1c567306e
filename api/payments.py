"""POST /api/payments and GET /api/invoices/{reference}."""

from decimal import Decimal

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from api.base import success_response
from core.models import Payment
from core.services.invoice_service import InvoiceService


class PaymentRequest(BaseModel):
    reference: str = Field(..., min_length=1)
    amount: Decimal


def create_payments_router(invoice_service: InvoiceService) -> APIRouter:
    router = APIRouter()

    @router.post("/payments")
    async def submit_payment(request: Request, body: PaymentRequest):
        payment = Payment(reference=body.reference, amount=body.amount)
        outcome, invoice = invoice_service.apply_payment(payment)
        return success_response(
            {
                "outcome": outcome.name,
                "message": outcome.message,
                "mutated": outcome.mutated,
                "invoice": invoice.model_dump(mode="json"),
            },
            request.state.request_id,
        ).model_dump(mode="json")

    @router.get("/invoices/{reference}")
    async def get_invoice(request: Request, reference: str):
        invoice = invoice_service.get_by_reference(reference)
        if invoice is None:
            raise ValueError(f"Invoice {reference} not found")
        return success_response(
            invoice.model_dump(mode="json"),
            request.state.request_id,
        ).model_dump(mode="json")

    return router
