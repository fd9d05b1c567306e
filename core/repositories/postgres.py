"""
PostgreSQL invoice repository.

Schema:

    invoices(
        reference   TEXT PRIMARY KEY,
        amount      NUMERIC NOT NULL,
        amount_paid NUMERIC NOT NULL DEFAULT 0,
        tax_amount  NUMERIC NOT NULL DEFAULT 0,
        type        TEXT NOT NULL
    )
    invoice_payments(
        invoice_reference TEXT REFERENCES invoices(reference),
        position          INTEGER NOT NULL,
        amount            NUMERIC NOT NULL,
        PRIMARY KEY (invoice_reference, position)
    )

NUMERIC columns come back from psycopg2 as Decimal, so amounts never pass
through floats.
"""

import logging

from clients.postgres_client import PostgresClient
from core.models import Invoice, Payment

logger = logging.getLogger(__name__)


class PostgresInvoiceRepository:
    """Invoice repository backed by PostgresClient."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def lookup(self, reference: str) -> Invoice | None:
        """
        Load an invoice and its payment history.

        Args:
            reference: Invoice reference

        Returns:
            Invoice if found, None otherwise.
        """
        row = self.postgres.execute_single(
            """
            SELECT reference, amount, amount_paid, tax_amount, type
            FROM invoices
            WHERE reference = %s
            """,
            (reference,)
        )

        if row is None:
            return None

        payment_rows = self.postgres.execute(
            """
            SELECT amount FROM invoice_payments
            WHERE invoice_reference = %s
            ORDER BY position
            """,
            (reference,)
        )

        return Invoice(
            **row,
            payments=[Payment(reference=reference, amount=p["amount"]) for p in payment_rows],
        )

    def add(self, invoice: Invoice) -> Invoice:
        """
        Insert a new invoice with any payments it already carries.

        Raises:
            ValueError: If the invoice has no reference
        """
        if not invoice.reference:
            raise ValueError("Invoice reference is required")

        with self.postgres.transaction() as cur:
            cur.execute(
                """
                INSERT INTO invoices (reference, amount, amount_paid, tax_amount, type)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (
                    invoice.reference, invoice.amount, invoice.amount_paid,
                    invoice.tax_amount, invoice.type.value,
                )
            )
            self._insert_payments(cur, invoice, start=0)

        logger.info("Invoice %s created", invoice.reference)
        return invoice

    def persist(self, invoice: Invoice) -> None:
        """
        Store processor mutations.

        Updates the running totals and appends payment rows beyond those
        already stored. History is append-only, so existing rows are left alone.

        Raises:
            ValueError: If the invoice has no reference or does not exist
        """
        if not invoice.reference:
            raise ValueError("Invoice reference is required")

        with self.postgres.transaction() as cur:
            cur.execute(
                """
                UPDATE invoices
                SET amount_paid = %s, tax_amount = %s
                WHERE reference = %s
                RETURNING reference
                """,
                (invoice.amount_paid, invoice.tax_amount, invoice.reference)
            )
            if cur.fetchone() is None:
                raise ValueError(f"Invoice {invoice.reference} not found")

            cur.execute(
                "SELECT COUNT(*) AS stored FROM invoice_payments WHERE invoice_reference = %s",
                (invoice.reference,)
            )
            stored = cur.fetchone()["stored"]
            self._insert_payments(cur, invoice, start=stored)

        logger.info("Invoice %s persisted", invoice.reference)

    def _insert_payments(self, cur, invoice: Invoice, start: int) -> None:
        payments = invoice.payments or []
        for position, payment in enumerate(payments[start:], start=start):
            cur.execute(
                """
                INSERT INTO invoice_payments (invoice_reference, position, amount)
                VALUES (%s, %s, %s)
                """,
                (invoice.reference, position, payment.amount)
            )
