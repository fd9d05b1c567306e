"""Payment value object."""

from decimal import Decimal

from pydantic import BaseModel


class Payment(BaseModel):
    """A single amount applied against the invoice identified by reference."""

    reference: str = ""
    amount: Decimal = Decimal("0")

    model_config = {"frozen": True}
