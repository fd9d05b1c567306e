"""
Handler for InvoicePaid events.

Records a settlement line in the application log for each invoice that
becomes fully paid, including the surcharge accrued over its payments.
"""

import logging
from typing import Callable

from core.events import InvoicePaid

logger = logging.getLogger(__name__)


def handle_invoice_paid(log: logging.Logger | None = None) -> Callable:
    """
    Factory that returns an InvoicePaid handler.

    Args:
        log: Logger to write settlement lines to (defaults to this module's)

    Returns:
        Handler callable
    """
    target = log or logger

    def handler(event: InvoicePaid):
        invoice = event.invoice
        target.info(
            "Invoice %s settled: %s paid in %d payments, tax %s",
            invoice.reference,
            invoice.amount_paid,
            len(invoice.payments or []),
            invoice.tax_amount,
        )

    return handler
