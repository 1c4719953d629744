"""Payment gateway seam and the Braintree-backed implementation.

The donation handler only talks to `PaymentGateway`. The Braintree adapter runs
the blocking SDK call in a worker thread and translates SDK result objects into
a `SaleResult` that is JSON-safe and gateway-neutral.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Protocol

import braintree
from pydantic import BaseModel

from givepay.services.donations.schemas import (
    CreditCardDetails,
    CustomerDetails,
    DonationRequest,
    PayPalDetails,
    Transaction,
)


class SaleRequest(BaseModel):
    """Parameters of one immediate-settlement sale."""

    amount: str
    payment_method_nonce: str
    submit_for_settlement: bool = True

    @classmethod
    def from_donation(cls, req: DonationRequest) -> "SaleRequest":
        return cls(amount=f"{req.donation_amount:.2f}", payment_method_nonce=req.nonce)

    def to_params(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "payment_method_nonce": self.payment_method_nonce,
            "options": {"submit_for_settlement": self.submit_for_settlement},
        }


@dataclass
class SaleResult:
    """Outcome of a sale as seen by the donation handler."""

    success: bool
    transaction: Transaction | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    errors: list[dict[str, Any]] = field(default_factory=list)
    message: str | None = None


class PaymentGateway(Protocol):
    async def sale(self, request: SaleRequest) -> SaleResult: ...


def _isoformat(value: Any) -> Any:
    return value.isoformat() if hasattr(value, "isoformat") else value


def _pick(obj: Any, names: list[str]) -> dict[str, Any] | None:
    if obj is None:
        return None
    return {name: _isoformat(getattr(obj, name, None)) for name in names}


def transaction_view(sdk_transaction: Any) -> Transaction:
    """Map a Braintree SDK transaction onto the gateway-neutral `Transaction`."""

    customer = getattr(sdk_transaction, "customer_details", None)
    paypal = getattr(sdk_transaction, "paypal_details", None)
    card = getattr(sdk_transaction, "credit_card_details", None)
    return Transaction(
        id=getattr(sdk_transaction, "id", None),
        status=getattr(sdk_transaction, "status", None),
        amount=str(sdk_transaction.amount),
        currency_iso_code=sdk_transaction.currency_iso_code,
        created_at=sdk_transaction.created_at,
        customer=CustomerDetails(
            first_name=getattr(customer, "first_name", None),
            last_name=getattr(customer, "last_name", None),
            email=getattr(customer, "email", None),
        ),
        paypal_account=(
            PayPalDetails(
                payer_first_name=getattr(paypal, "payer_first_name", None),
                payer_last_name=getattr(paypal, "payer_last_name", None),
                payer_email=getattr(paypal, "payer_email", None),
            )
            if paypal is not None
            else None
        ),
        credit_card=(
            CreditCardDetails(cardholder_name=getattr(card, "cardholder_name", None))
            if card is not None
            else None
        ),
    )


def transaction_payload(sdk_transaction: Any) -> dict[str, Any]:
    """JSON-safe rendering of the transaction returned to the donor."""

    payload = _pick(
        sdk_transaction,
        [
            "id",
            "status",
            "type",
            "currency_iso_code",
            "created_at",
            "merchant_account_id",
            "payment_instrument_type",
            "processor_response_code",
            "processor_response_text",
        ],
    )
    payload["amount"] = str(sdk_transaction.amount)
    payload["customer"] = _pick(getattr(sdk_transaction, "customer_details", None), ["first_name", "last_name", "email"])
    payload["credit_card"] = _pick(
        getattr(sdk_transaction, "credit_card_details", None),
        ["cardholder_name", "card_type", "last_4", "expiration_date"],
    )
    payload["paypal_account"] = _pick(
        getattr(sdk_transaction, "paypal_details", None),
        ["payer_first_name", "payer_last_name", "payer_email", "payer_id"],
    )
    return payload


def deep_errors(sdk_result: Any) -> list[dict[str, Any]]:
    """Flatten the SDK's nested validation errors into plain dicts."""

    return [
        {"attribute": error.attribute, "code": error.code, "message": error.message}
        for error in sdk_result.errors.deep_errors
    ]


def environment_for(name: str) -> braintree.Environment:
    try:
        return braintree.Environment.All[name.lower()]
    except KeyError as exc:
        raise ValueError(f"unknown braintree environment: {name}") from exc


class BraintreePaymentGateway:
    """`PaymentGateway` backed by the Braintree Python SDK."""

    def __init__(self, environment: str, merchant_id: str, public_key: str, private_key: str) -> None:
        self.gateway = braintree.BraintreeGateway(
            braintree.Configuration(
                environment=environment_for(environment),
                merchant_id=merchant_id,
                public_key=public_key,
                private_key=private_key,
            )
        )

    @classmethod
    def from_settings(cls, settings) -> "BraintreePaymentGateway":
        return cls(
            environment=settings.braintree_environment,
            merchant_id=settings.braintree_merchant_id,
            public_key=settings.braintree_public_key,
            private_key=settings.braintree_private_key,
        )

    async def sale(self, request: SaleRequest) -> SaleResult:
        # The SDK performs blocking HTTP calls with its own timeout handling.
        result = await asyncio.to_thread(self.gateway.transaction.sale, request.to_params())
        return self.translate(result)

    @staticmethod
    def translate(result: Any) -> SaleResult:
        """Convert an SDK `SuccessfulResult` / `ErrorResult` into a `SaleResult`."""

        if result.is_success:
            return SaleResult(
                success=True,
                transaction=transaction_view(result.transaction),
                payload={"success": True, "transaction": transaction_payload(result.transaction)},
            )
        return SaleResult(
            success=False,
            errors=deep_errors(result),
            message=getattr(result, "message", None),
        )
