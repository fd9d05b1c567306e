"""
Payment application decision procedure.

Given an invoice and an incoming payment, decides whether the payment is
legal, updates the running totals, and reports which outcome applies. Pure
in-memory logic: lookup and persistence belong to the caller.

Checks run in a fixed order and the first match wins:

    1. no invoice                       -> NoMatchingInvoiceError
    2. zero-amount invoice              -> NO_PAYMENT_NEEDED or InvalidInvoiceStateError
    3. non-positive payment (only when
       reject_non_positive_payments)    -> InvalidPaymentAmountError
    4. payment above invoice face value -> PAYMENT_EXCEEDS_INVOICE_AMOUNT
    5. payment history sums to amount   -> ALREADY_FULLY_PAID
    6. payment above amount remaining   -> PAYMENT_EXCEEDS_REMAINING
    7. apply                            -> FULLY_PAID or PARTIALLY_PAID

Only FULLY_PAID and PARTIALLY_PAID mutate the invoice. A call that raises
leaves the invoice untouched.
"""

from enum import Enum

from core.config import PaymentConfig
from core.exceptions import (
    InvalidInvoiceStateError,
    InvalidPaymentAmountError,
    NoMatchingInvoiceError,
)
from core.models import Invoice, InvoiceType, Payment


class PaymentOutcome(str, Enum):
    """Result of applying a payment. Values are the user-facing messages."""

    NO_PAYMENT_NEEDED = "no payment needed"
    PAYMENT_EXCEEDS_INVOICE_AMOUNT = "the payment is greater than the invoice amount"
    ALREADY_FULLY_PAID = "invoice was already fully paid"
    PAYMENT_EXCEEDS_REMAINING = "the payment is greater than the partial amount remaining"
    FULLY_PAID = "invoice is now fully paid"
    PARTIALLY_PAID = "another partial payment received, still not fully paid"

    @property
    def mutated(self) -> bool:
        """Whether this outcome changed the invoice."""
        return self in (PaymentOutcome.FULLY_PAID, PaymentOutcome.PARTIALLY_PAID)

    @property
    def message(self) -> str:
        return self.value


class PaymentProcessor:
    """Applies payments to invoices according to a PaymentConfig."""

    def __init__(self, config: PaymentConfig | None = None):
        self.config = config or PaymentConfig()

    def process(self, invoice: Invoice | None, payment: Payment) -> PaymentOutcome:
        """
        Apply payment to invoice.

        Args:
            invoice: Invoice the payment reference resolved to, or None
            payment: Incoming payment

        Returns:
            The single outcome for this call. On FULLY_PAID/PARTIALLY_PAID the
            invoice has been updated in place and must be persisted by the caller.

        Raises:
            NoMatchingInvoiceError: invoice is None
            InvalidInvoiceStateError: zero-amount invoice with recorded payments
            InvalidPaymentAmountError: non-positive payment, when configured to reject
        """
        if invoice is None:
            raise NoMatchingInvoiceError(payment.reference)

        if invoice.amount == 0:
            if not invoice.has_payments:
                return PaymentOutcome.NO_PAYMENT_NEEDED
            raise InvalidInvoiceStateError(invoice.reference)

        if self.config.reject_non_positive_payments and payment.amount <= 0:
            raise InvalidPaymentAmountError(payment.amount)

        if payment.amount > invoice.amount:
            return PaymentOutcome.PAYMENT_EXCEEDS_INVOICE_AMOUNT

        # History sum and amount_paid are tracked separately; either can say "paid"
        if invoice.total_payments == invoice.amount:
            return PaymentOutcome.ALREADY_FULLY_PAID

        if payment.amount > invoice.amount_remaining:
            return PaymentOutcome.PAYMENT_EXCEEDS_REMAINING

        self._apply(invoice, payment)

        if invoice.amount_paid == invoice.amount:
            return PaymentOutcome.FULLY_PAID
        return PaymentOutcome.PARTIALLY_PAID

    def _apply(self, invoice: Invoice, payment: Payment) -> None:
        """Fold payment into the invoice's running totals and history."""
        invoice.amount_paid += payment.amount

        if invoice.type == InvoiceType.COMMERCIAL:
            invoice.tax_amount += payment.amount * self.config.commercial_tax_rate

        if invoice.payments is None:
            invoice.payments = []
        invoice.payments.append(payment)


def process_payment(invoice: Invoice | None, payment: Payment) -> PaymentOutcome:
    """Apply payment using the default configuration."""
    return PaymentProcessor().process(invoice, payment)
