"""API test fixtures - TestClient over an in-memory repository."""

from decimal import Decimal

import pytest
from starlette.testclient import TestClient

from api.app import build_invoice_service, create_app
from core.config import PaymentConfig
from core.models import Invoice, InvoiceType, Payment


@pytest.fixture
def seeded_repository(repository):
    """Repository holding one invoice per interesting state."""
    repository.add(Invoice(reference="ZERO", amount=Decimal("0")))
    repository.add(Invoice(reference="CORRUPT", amount=Decimal("0"), payments=[Payment(amount=Decimal("100"))]))
    repository.add(Invoice(reference="HALF", amount=Decimal("200"), amount_paid=Decimal("100")))
    repository.add(Invoice(reference="COM", amount=Decimal("1000"), type=InvoiceType.COMMERCIAL))
    return repository


@pytest.fixture
def payment_config():
    return PaymentConfig()


@pytest.fixture
def app(seeded_repository, payment_config):
    return create_app(build_invoice_service(seeded_repository, payment_config))


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
