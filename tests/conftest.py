"""Shared fakes for the gateway and document store."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from givepay.common.config import DonationSettings
from givepay.services.donations.api import create_app
from givepay.services.donations.gateway import SaleResult
from givepay.services.donations.schemas import CustomerDetails, PayPalDetails, Transaction
from givepay.services.donations.service import DonationService


CREATED_AT = datetime(2026, 10, 18, 12, 30, tzinfo=timezone.utc)


class FakeGateway:
    """Records sale requests and replays a canned result."""

    def __init__(self, result: SaleResult | None = None, exc: Exception | None = None) -> None:
        self.result = result
        self.exc = exc
        self.requests = []

    async def sale(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.result


class InMemoryStore:
    def __init__(self) -> None:
        self.documents: list[tuple[str, dict]] = []

    async def add(self, collection, document):
        self.documents.append((collection, document))
        return f"doc-{len(self.documents)}"


class FailingStore:
    async def add(self, collection, document):
        raise RuntimeError("store unavailable")


def settled_result() -> SaleResult:
    transaction = Transaction(
        id="tx-1",
        status="submitted_for_settlement",
        amount="25.00",
        currency_iso_code="USD",
        created_at=CREATED_AT,
        customer=CustomerDetails(first_name="Ana", last_name="Lee", email=None),
        paypal_account=PayPalDetails(payer_email="a@b.com"),
    )
    return SaleResult(
        success=True,
        transaction=transaction,
        payload={"success": True, "transaction": {"id": "tx-1", "amount": "25.00"}},
    )


def declined_result() -> SaleResult:
    return SaleResult(
        success=False,
        errors=[{"attribute": "payment_method_nonce", "code": "91565", "message": "Unknown nonce."}],
        message="Unknown nonce.",
    )


def make_settings(**overrides) -> DonationSettings:
    values = {
        "postgres_dsn": "sqlite://",
        "braintree_merchant_id": "merchant",
        "braintree_public_key": "public",
        "braintree_private_key": "private",
        "otel_enabled": False,
    }
    values.update(overrides)
    return DonationSettings(**values)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def build_client(store):
    """Factory returning `(client, gateway)` for a given gateway behavior."""

    def _build(result=None, exc=None, store_override=None, **settings_overrides):
        gateway = FakeGateway(result=result, exc=exc)
        settings = make_settings(**settings_overrides)
        service = DonationService(
            gateway=gateway,
            store=store_override or store,
            collection=settings.donations_collection,
            service_name=settings.service_name,
        )
        return TestClient(create_app(service, settings)), gateway

    return _build
