"""
Domain events for invoice payments.

Immutable event objects published by InvoiceService after a payment has been
applied and persisted. Handlers react without the service knowing who is
listening.

Events carry the full domain objects so handlers don't need to re-fetch the
invoice from the repository.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class PaymentEvent:
    """Base class for all payment domain events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


@dataclass(frozen=True)
class PaymentApplied(PaymentEvent):
    """A payment was folded into an invoice (partial or final)."""
    invoice: Any = None  # Invoice
    payment: Any = None  # Payment
    outcome: Any = None  # PaymentOutcome

    @classmethod
    def create(cls, invoice: Any, payment: Any, outcome: Any) -> "PaymentApplied":
        return cls(invoice=invoice, payment=payment, outcome=outcome)


@dataclass(frozen=True)
class InvoicePaid(PaymentEvent):
    """Invoice became fully paid."""
    invoice: Any = None

    @classmethod
    def create(cls, invoice: Any) -> "InvoicePaid":
        return cls(invoice=invoice)
