"""Typed exceptions for payment processing failures.

Both invoice-level failures are terminal: retrying the same payment can never
succeed without the underlying record changing.
"""

from decimal import Decimal


class PaymentError(Exception):
    """Base class for payment processing errors."""


class NoMatchingInvoiceError(PaymentError):
    """The payment reference does not resolve to any invoice."""

    def __init__(self, reference: str | None = None):
        self.reference = reference
        super().__init__("There is no invoice matching this payment")


class InvalidInvoiceStateError(PaymentError):
    """
    Persisted invoice violates its own invariants.

    Raised for a zero-amount invoice that has recorded payments. This points
    at corrupted data or a bug upstream, not at bad user input.
    """

    def __init__(self, reference: str | None = None):
        self.reference = reference
        super().__init__(
            "The invoice is in an invalid state, it has an amount of 0 and it has payments."
        )


class InvalidPaymentAmountError(PaymentError):
    """Payment amount is zero or negative (only when rejection is enabled)."""

    def __init__(self, amount: Decimal):
        self.amount = amount
        super().__init__(f"Payment amount must be positive, got {amount}")
