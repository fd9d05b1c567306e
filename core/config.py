"""Payment processing configuration."""

import os
from decimal import Decimal

from pydantic import BaseModel, Field


class PaymentConfig(BaseModel):
    """
    Payment processing configuration.

    Rates are fractions (0.14 = 14%), never percentages.
    """

    commercial_tax_rate: Decimal = Field(
        default=Decimal("0.14"),
        description="Surcharge added to tax_amount for each payment on a commercial invoice",
        ge=0,
        le=1,
    )
    reject_non_positive_payments: bool = Field(
        default=False,
        description="Raise InvalidPaymentAmountError for payments of zero or less",
    )

    @classmethod
    def from_env(cls) -> "PaymentConfig":
        """
        Build config from environment variables, falling back to defaults.

        PAYMENTS_COMMERCIAL_TAX_RATE: decimal string, e.g. "0.14"
        PAYMENTS_REJECT_NON_POSITIVE: "true"/"1"/"yes" to enable
        """
        values = {}

        rate = os.getenv("PAYMENTS_COMMERCIAL_TAX_RATE")
        if rate:
            values["commercial_tax_rate"] = rate

        reject = os.getenv("PAYMENTS_REJECT_NON_POSITIVE")
        if reject:
            values["reject_non_positive_payments"] = reject.strip().lower() in {"1", "true", "yes"}

        return cls(**values)
