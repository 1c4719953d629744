"""Translation of Braintree SDK results into gateway-neutral sale results."""

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import braintree
import pytest

from givepay.services.donations.gateway import BraintreePaymentGateway, SaleRequest, environment_for
from givepay.services.donations.schemas import DonationRequest


CREATED_AT = datetime(2026, 10, 18, 12, 30, tzinfo=timezone.utc)


def sdk_transaction(**overrides):
    values = {
        "id": "tx-9",
        "status": "submitted_for_settlement",
        "type": "sale",
        "amount": Decimal("25.00"),
        "currency_iso_code": "USD",
        "created_at": CREATED_AT,
        "customer_details": SimpleNamespace(first_name="Ana", last_name="Lee", email=None),
        "paypal_details": SimpleNamespace(payer_first_name=None, payer_last_name=None, payer_email="a@b.com"),
        "credit_card_details": SimpleNamespace(cardholder_name=None, card_type=None, last_4=None),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_sale_request_formats_amount_with_two_decimals():
    """Sale parameters carry a two-decimal amount, the nonce, and immediate settlement."""

    sale = SaleRequest.from_donation(DonationRequest.model_validate({"donationAmount": 25, "nonce": "fake-valid-nonce"}))

    assert sale.to_params() == {
        "amount": "25.00",
        "payment_method_nonce": "fake-valid-nonce",
        "options": {"submit_for_settlement": True},
    }


def test_sale_request_rounds_to_cents():
    """Fractional cents are rounded to two decimals."""

    sale = SaleRequest.from_donation(DonationRequest.model_validate({"donationAmount": 10.126, "nonce": "n"}))

    assert sale.amount == "10.13"


def test_successful_result_maps_transaction_and_payload():
    """A successful SDK result yields the neutral transaction and a JSON-safe payload."""

    result = BraintreePaymentGateway.translate(SimpleNamespace(is_success=True, transaction=sdk_transaction()))

    assert result.success is True
    assert result.transaction.id == "tx-9"
    assert result.transaction.amount == "25.00"
    assert result.transaction.customer.first_name == "Ana"
    assert result.transaction.paypal_account.payer_email == "a@b.com"
    assert result.transaction.credit_card.cardholder_name is None
    assert result.payload["success"] is True
    assert result.payload["transaction"]["amount"] == "25.00"
    assert result.payload["transaction"]["created_at"] == CREATED_AT.isoformat()
    assert result.payload["transaction"]["customer"]["last_name"] == "Lee"


def test_missing_detail_blocks_map_to_none():
    """Transactions without PayPal or card details map those blocks to None."""

    transaction = sdk_transaction()
    del transaction.paypal_details
    del transaction.credit_card_details

    result = BraintreePaymentGateway.translate(SimpleNamespace(is_success=True, transaction=transaction))

    assert result.transaction.paypal_account is None
    assert result.transaction.credit_card is None
    assert result.payload["transaction"]["paypal_account"] is None


def test_error_result_flattens_deep_errors():
    """A failed SDK result is reduced to its flattened deep errors."""

    sdk_result = SimpleNamespace(
        is_success=False,
        message="Amount is an invalid format.",
        errors=SimpleNamespace(
            deep_errors=[SimpleNamespace(attribute="amount", code="81503", message="Amount is an invalid format.")]
        ),
    )

    result = BraintreePaymentGateway.translate(sdk_result)

    assert result.success is False
    assert result.transaction is None
    assert result.errors == [{"attribute": "amount", "code": "81503", "message": "Amount is an invalid format."}]
    assert result.message == "Amount is an invalid format."


def test_environment_lookup_is_case_insensitive():
    """Environment names resolve to SDK environments regardless of case."""

    assert environment_for("Sandbox") is braintree.Environment.Sandbox
    assert environment_for("production") is braintree.Environment.Production


def test_unknown_environment_is_rejected():
    """An unknown environment name fails fast at construction."""

    with pytest.raises(ValueError):
        environment_for("staging")
