"""Donation charge flow.

Validates the inbound body, runs one immediate-settlement sale through the
gateway, and derives the donation record for persistence on success. The
gateway and the document store are passed in, never looked up globally.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from givepay.common.logging import logger, transaction_id_ctx
from givepay.common.metrics import (
    donation_failure_total,
    donation_requests_total,
    donation_success_total,
    gateway_latency_seconds,
)
from givepay.services.donations.gateway import PaymentGateway, SaleRequest
from givepay.services.donations.records import build_donation_record
from givepay.services.donations.schemas import DonationDetails, DonationRequest
from givepay.services.donations.store import DocumentStore, PersistResult, persist_document


@dataclass
class DonationOutcome:
    """HTTP-ready result of one charge attempt."""

    status_code: int
    body: dict[str, Any]
    record: DonationDetails | None = None


class DonationService:
    """Charges donations and records settled ones in the document store."""

    def __init__(
        self,
        gateway: PaymentGateway,
        store: DocumentStore,
        collection: str = "donations",
        service_name: str = "donations-api",
    ) -> None:
        self.gateway = gateway
        self.store = store
        self.collection = collection
        self.service_name = service_name

    def _fail(self, reason: str, body: dict[str, Any]) -> DonationOutcome:
        donation_failure_total.labels(service=self.service_name, reason=reason).inc()
        return DonationOutcome(status_code=500, body=body)

    async def charge(self, body: Any) -> DonationOutcome:
        """Run the sale for one request body.

        Anything raised before the gateway hands back a result is reported as a
        single-element error list. A declined or invalid sale reports the
        gateway's deep errors. Neither path produces a record.
        """

        donation_requests_total.labels(service=self.service_name).inc()
        try:
            sale = SaleRequest.from_donation(DonationRequest.model_validate(body))
            with gateway_latency_seconds.labels(service=self.service_name).time():
                result = await self.gateway.sale(sale)
        except ValidationError as exc:
            logger.warning("donation_request_invalid error=%s", exc)
            return self._fail("invalid_request", {"errors": [str(exc)]})
        except Exception as exc:
            logger.exception("donation_sale_error error=%s", exc)
            return self._fail("gateway_error", {"errors": [str(exc)]})

        if not result.success:
            logger.warning(
                "donation_sale_failed message=%s error_count=%s",
                result.message,
                len(result.errors),
            )
            return self._fail("declined", {"errors": result.errors})

        transaction_id_ctx.set(result.transaction.id or "")
        donation_success_total.labels(service=self.service_name).inc()
        logger.info(
            "donation_sale_settled amount=%s currency=%s",
            result.transaction.amount,
            result.transaction.currency_iso_code,
        )
        return DonationOutcome(
            status_code=200,
            body=result.payload,
            record=build_donation_record(result.transaction),
        )

    async def persist(self, record: DonationDetails) -> PersistResult:
        return await persist_document(
            self.store,
            self.collection,
            record.to_document(),
            self.service_name,
        )
