"""Tests for POST /api/payments and GET /api/invoices/{reference}."""

import logging
from decimal import Decimal
from unittest.mock import Mock

import pytest

from core.config import PaymentConfig


def _pay(client, reference, amount):
    return client.post("/api/payments", json={"reference": reference, "amount": amount})


# =============================================================================
# OUTCOMES
# =============================================================================


class TestPaymentOutcomes:

    def test_partial_payment(self, client, seeded_repository):
        response = _pay(client, "HALF", "50")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["outcome"] == "PARTIALLY_PAID"
        assert body["data"]["message"] == "another partial payment received, still not fully paid"
        assert body["data"]["mutated"] is True
        assert seeded_repository.lookup("HALF").amount_paid == Decimal("150")

    def test_fully_paid_returns_updated_invoice(self, client):
        body = _pay(client, "HALF", "100").json()

        assert body["data"]["outcome"] == "FULLY_PAID"
        assert Decimal(body["data"]["invoice"]["amount_paid"]) == Decimal("200")
        assert len(body["data"]["invoice"]["payments"]) == 1

    def test_rejected_outcome_is_still_success(self, client, seeded_repository):
        body = _pay(client, "HALF", "150").json()

        assert body["success"] is True
        assert body["data"]["outcome"] == "PAYMENT_EXCEEDS_REMAINING"
        assert body["data"]["mutated"] is False
        assert seeded_repository.lookup("HALF").amount_paid == Decimal("100")

    def test_no_payment_needed(self, client):
        body = _pay(client, "ZERO", "10").json()
        assert body["data"]["message"] == "no payment needed"

    def test_commercial_tax_in_response(self, client):
        body = _pay(client, "COM", "100").json()
        assert Decimal(body["data"]["invoice"]["tax_amount"]) == Decimal("14")

    def test_accepts_numeric_amount(self, client):
        body = _pay(client, "HALF", 25).json()
        assert body["data"]["outcome"] == "PARTIALLY_PAID"

    def test_invoice_read_once_per_payment(self, client, seeded_repository, monkeypatch):
        """The response invoice comes from the processed payment, not a second read."""
        lookup = Mock(wraps=seeded_repository.lookup)
        monkeypatch.setattr(seeded_repository, "lookup", lookup)

        body = _pay(client, "HALF", "50").json()

        assert lookup.call_count == 1
        assert Decimal(body["data"]["invoice"]["amount_paid"]) == Decimal("150")


# =============================================================================
# ERRORS
# =============================================================================


class TestPaymentErrors:

    def test_unknown_reference_is_404(self, client):
        response = _pay(client, "X", "10")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["error"]["message"] == "There is no invoice matching this payment"

    def test_corrupt_invoice_is_409(self, client):
        response = _pay(client, "CORRUPT", "10")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_INVOICE_STATE"

    def test_corrupt_invoice_logged_once(self, client, caplog):
        with caplog.at_level(logging.WARNING):
            _pay(client, "CORRUPT", "10")

        corrupt = [r for r in caplog.records if "CORRUPT" in r.getMessage()]
        assert len(corrupt) == 1
        assert corrupt[0].name == "api.errors"
        assert corrupt[0].levelno == logging.ERROR

    def test_missing_reference_is_422(self, client):
        response = client.post("/api/payments", json={"amount": "10"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_non_numeric_amount_is_422(self, client):
        assert _pay(client, "HALF", "lots").status_code == 422

    @pytest.mark.parametrize("payment_config", [PaymentConfig(reject_non_positive_payments=True)])
    def test_negative_amount_rejected_when_configured(self, client):
        response = _pay(client, "HALF", "-5")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PAYMENT_AMOUNT"


# =============================================================================
# INVOICE READS
# =============================================================================


class TestGetInvoice:

    def test_returns_invoice(self, client):
        response = client.get("/api/invoices/COM")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["reference"] == "COM"
        assert data["type"] == "commercial"

    def test_missing_is_404(self, client):
        response = client.get("/api/invoices/none")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


# =============================================================================
# REQUEST IDS
# =============================================================================


class TestRequestId:

    def test_generated_when_absent(self, client):
        response = client.get("/api/invoices/COM")

        request_id = response.headers["X-Request-ID"]
        assert request_id
        assert response.json()["meta"]["request_id"] == request_id

    def test_caller_id_is_echoed(self, client):
        response = client.get("/api/invoices/COM", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["meta"]["request_id"] == "trace-123"

    def test_error_responses_carry_request_id(self, client):
        response = _pay(client, "X", "1")
        assert response.json()["meta"]["request_id"] == response.headers["X-Request-ID"]
