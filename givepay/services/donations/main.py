"""Process entrypoint: wires settings, Braintree, the SQL document store, and
the FastAPI app (`uvicorn givepay.services.donations.main:app`)."""

from givepay.common.config import get_settings
from givepay.common.db import make_session_factory
from givepay.common.logging import configure_logging
from givepay.common.startup import log_startup_config
from givepay.common.tracing import instrument_app, setup_tracing
from givepay.services.donations.api import create_app
from givepay.services.donations.gateway import BraintreePaymentGateway
from givepay.services.donations.service import DonationService
from givepay.services.donations.store import SqlDocumentStore

settings = get_settings()
configure_logging(settings.service_name, settings.log_level)
if settings.otel_enabled:
    setup_tracing(settings.service_name, settings.otel_exporter_otlp_endpoint)
log_startup_config(
    settings.service_name,
    [
        "SERVICE_NAME",
        "POSTGRES_DSN",
        "API_PREFIX",
        "DONATIONS_COLLECTION",
        "PERSIST_MODE",
        "BRAINTREE_ENVIRONMENT",
        "BRAINTREE_MERCHANT_ID",
        "BRAINTREE_PRIVATE_KEY",
    ],
)
service = DonationService(
    gateway=BraintreePaymentGateway.from_settings(settings),
    store=SqlDocumentStore(make_session_factory(settings.postgres_dsn)),
    collection=settings.donations_collection,
    service_name=settings.service_name,
)

app = create_app(service, settings)
if settings.otel_enabled:
    instrument_app(app)
