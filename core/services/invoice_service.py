"""
Invoice service for applying payments.

Resolves a payment's reference through the repository, runs the payment
processor, persists the invoice when the outcome changed it, then publishes
events. Nothing is persisted or published when the processor raises.
"""

import logging

from core.event_bus import EventBus
from core.events import InvoicePaid, PaymentApplied
from core.models import Invoice, Payment
from core.payment_processor import PaymentOutcome, PaymentProcessor
from core.repositories import InvoiceRepository

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for invoice payment operations."""

    def __init__(
        self,
        repository: InvoiceRepository,
        event_bus: EventBus,
        processor: PaymentProcessor | None = None,
    ):
        self.repository = repository
        self.event_bus = event_bus
        self.processor = processor or PaymentProcessor()

    def get_by_reference(self, reference: str) -> Invoice | None:
        """
        Get invoice by reference.

        Returns:
            Invoice if found, None otherwise.
        """
        return self.repository.lookup(reference)

    def process_payment(self, payment: Payment) -> PaymentOutcome:
        """Apply a payment and return only its outcome. See apply_payment."""
        outcome, _ = self.apply_payment(payment)
        return outcome

    def apply_payment(self, payment: Payment) -> tuple[PaymentOutcome, Invoice]:
        """
        Apply a payment to the invoice it references.

        Args:
            payment: Incoming payment; its reference selects the invoice

        Returns:
            (outcome, invoice). The invoice is the one the reference resolved
            to, in its post-processing state. FULLY_PAID and PARTIALLY_PAID
            outcomes have been persisted by the time this returns.

        Raises:
            NoMatchingInvoiceError: If the reference resolves to no invoice
            InvalidInvoiceStateError: If the stored invoice is corrupt
            InvalidPaymentAmountError: If non-positive payments are rejected
        """
        invoice = self.repository.lookup(payment.reference)

        outcome = self.processor.process(invoice, payment)

        if not outcome.mutated:
            logger.info(
                "Payment of %s against invoice %s not applied: %s",
                payment.amount, payment.reference, outcome.value,
            )
            return outcome, invoice

        self.repository.persist(invoice)
        logger.info(
            "Payment of %s applied to invoice %s (paid %s of %s)",
            payment.amount, payment.reference, invoice.amount_paid, invoice.amount,
        )

        self.event_bus.publish(PaymentApplied.create(invoice=invoice, payment=payment, outcome=outcome))
        if outcome == PaymentOutcome.FULLY_PAID:
            self.event_bus.publish(InvoicePaid.create(invoice=invoice))

        return outcome, invoice
