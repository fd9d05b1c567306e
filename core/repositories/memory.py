"""In-process invoice repository, keyed by reference."""

import logging
from typing import Dict

from core.models import Invoice

logger = logging.getLogger(__name__)


class InMemoryInvoiceRepository:
    """
    Dict-backed repository.

    Stores and hands out deep copies, so a mutation made by the processor is
    only visible to later lookups once persist() has been called.
    """

    def __init__(self):
        self._invoices: Dict[str, Invoice] = {}

    def add(self, invoice: Invoice) -> Invoice:
        """
        Store a new invoice.

        Raises:
            ValueError: If the invoice has no reference or the reference is taken
        """
        if not invoice.reference:
            raise ValueError("Invoice reference is required")
        if invoice.reference in self._invoices:
            raise ValueError(f"Invoice {invoice.reference} already exists")

        self._invoices[invoice.reference] = invoice.model_copy(deep=True)
        return invoice

    def lookup(self, reference: str) -> Invoice | None:
        stored = self._invoices.get(reference)
        if stored is None:
            return None
        return stored.model_copy(deep=True)

    def persist(self, invoice: Invoice) -> None:
        if not invoice.reference:
            raise ValueError("Invoice reference is required")
        if invoice.reference not in self._invoices:
            raise ValueError(f"Invoice {invoice.reference} not found")

        self._invoices[invoice.reference] = invoice.model_copy(deep=True)
        logger.debug("Persisted invoice %s in memory", invoice.reference)

    def __len__(self) -> int:
        return len(self._invoices)
