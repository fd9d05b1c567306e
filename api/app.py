"""Application factory wiring services, routes and error handling."""

import logging
import os

from fastapi import FastAPI

from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from api.payments import create_payments_router
from clients.postgres_client import PostgresClient
from core.config import PaymentConfig
from core.event_bus import EventBus
from core.handlers.invoice_paid_handler import handle_invoice_paid
from core.payment_processor import PaymentProcessor
from core.repositories import InvoiceRepository, PostgresInvoiceRepository
from core.services.invoice_service import InvoiceService

logger = logging.getLogger(__name__)


def build_invoice_service(
    repository: InvoiceRepository,
    config: PaymentConfig | None = None,
) -> InvoiceService:
    """Create an InvoiceService with its event bus and default subscribers."""
    event_bus = EventBus()
    event_bus.subscribe("InvoicePaid", handle_invoice_paid())
    return InvoiceService(repository, event_bus, PaymentProcessor(config))


def create_app(invoice_service: InvoiceService | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    Without an explicit service, invoices are read from PostgreSQL at
    DATABASE_URL and config comes from the environment.
    """
    if invoice_service is None:
        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required")

        repository = PostgresInvoiceRepository(PostgresClient(database_url))
        invoice_service = build_invoice_service(repository, PaymentConfig.from_env())
        logger.info("Invoice service backed by PostgreSQL")

    app = FastAPI(title="Invoice Payments")
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(create_payments_router(invoice_service), prefix="/api")

    return app
