"""Repository contract consumed by InvoiceService."""

from typing import Protocol

from core.models import Invoice


class InvoiceRepository(Protocol):
    """Resolves payment references to invoices and stores processor mutations."""

    def lookup(self, reference: str) -> Invoice | None:
        """Return the invoice for reference, or None if there is none."""
        ...

    def persist(self, invoice: Invoice) -> None:
        """Durably store amount_paid, tax_amount and payments of invoice."""
        ...
