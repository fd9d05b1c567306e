"""Core domain models."""

from core.models.payment import Payment
from core.models.invoice import Invoice, InvoiceType

__all__ = ["Payment", "Invoice", "InvoiceType"]
