"""Invoice domain models.

All amounts are exact decimals. Floats are never stored: pydantic converts
whatever arrives (int, str, Decimal) into Decimal on validation.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from core.models.payment import Payment


class InvoiceType(str, Enum):
    """Invoice kind. Determines whether payments accrue a tax surcharge."""

    STANDARD = "standard"
    COMMERCIAL = "commercial"


class Invoice(BaseModel):
    """
    Invoice as stored by the repository.

    amount_paid, tax_amount and payments are only ever changed by the
    payment processor. payments may be None for records that never had a
    payment history; this is treated as empty.
    """

    reference: str | None = None
    amount: Decimal = Field(Decimal("0"), ge=0)
    amount_paid: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    type: InvoiceType = InvoiceType.STANDARD
    payments: list[Payment] | None = Field(default_factory=list)

    model_config = {"from_attributes": True}

    @property
    def has_payments(self) -> bool:
        """Whether any payment has been recorded against this invoice."""
        return bool(self.payments)

    @property
    def total_payments(self) -> Decimal:
        """Sum of recorded payment amounts (0 when there are none)."""
        return sum((p.amount for p in self.payments or []), Decimal("0"))

    @property
    def amount_remaining(self) -> Decimal:
        """Face value not yet covered by amount_paid."""
        return self.amount - self.amount_paid
