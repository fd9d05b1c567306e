"""Invoice storage behind the lookup/persist contract."""

from core.repositories.base import InvoiceRepository
from core.repositories.memory import InMemoryInvoiceRepository
from core.repositories.postgres import PostgresInvoiceRepository

__all__ = ["InvoiceRepository", "InMemoryInvoiceRepository", "PostgresInvoiceRepository"]
