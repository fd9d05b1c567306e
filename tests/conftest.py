"""Shared test fixtures for the payments test suite."""

from decimal import Decimal
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file BEFORE any imports that read env vars
load_dotenv(Path(__file__).parent.parent / ".env")

from core.event_bus import EventBus
from core.models import Invoice, InvoiceType, Payment
from core.repositories import InMemoryInvoiceRepository


# =============================================================================
# ENVIRONMENT
# =============================================================================


@pytest.fixture(autouse=True)
def clean_payment_env(monkeypatch):
    """Keep config tests independent of whatever the shell or .env set."""
    monkeypatch.delenv("PAYMENTS_COMMERCIAL_TAX_RATE", raising=False)
    monkeypatch.delenv("PAYMENTS_REJECT_NON_POSITIVE", raising=False)


# =============================================================================
# INVOICE FIXTURES
# =============================================================================


@pytest.fixture
def standard_invoice() -> Invoice:
    """200.00 standard invoice with 100.00 already paid and no history."""
    return Invoice(
        reference="INV-STD",
        amount=Decimal("200"),
        amount_paid=Decimal("100"),
        payments=[],
        type=InvoiceType.STANDARD,
    )


@pytest.fixture
def commercial_invoice() -> Invoice:
    """1000.00 commercial invoice, nothing paid yet."""
    return Invoice(
        reference="INV-COM",
        amount=Decimal("1000"),
        payments=[],
        type=InvoiceType.COMMERCIAL,
    )


@pytest.fixture
def make_payment():
    """Factory for payments; amounts given as strings stay exact."""

    def _make(amount, reference: str = "INV-STD") -> Payment:
        return Payment(reference=reference, amount=Decimal(str(amount)))

    return _make


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def repository() -> InMemoryInvoiceRepository:
    return InMemoryInvoiceRepository()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()
