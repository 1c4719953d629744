"""HTTP surface for donations: the charge route plus health and metrics."""

from json import JSONDecodeError
from time import perf_counter
from uuid import uuid4

from fastapi import APIRouter, BackgroundTasks, FastAPI, Header, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from givepay.common.config import DonationSettings
from givepay.common.logging import logger, trace_id_ctx
from givepay.common.metrics import http_request_duration_seconds, http_requests_total, metrics_response
from givepay.services.donations.service import DonationService


def create_app(service: DonationService, settings: DonationSettings) -> FastAPI:
    """Build the FastAPI app around an already-wired `DonationService`."""

    app = FastAPI(title="GivePay Donations API")
    app.state.donation_service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        """Record request count and latency for every HTTP call."""

        start = perf_counter()
        route = request.url.path
        method = request.method
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            route_obj = request.scope.get("route")
            if route_obj is not None and getattr(route_obj, "path", None):
                route = route_obj.path
            return response
        finally:
            elapsed = max(0.0, perf_counter() - start)
            http_request_duration_seconds.labels(
                service=settings.service_name,
                route=route,
                method=method,
            ).observe(elapsed)
            http_requests_total.labels(
                service=settings.service_name,
                route=route,
                method=method,
                status_code=str(status_code),
            ).inc()

    router = APIRouter(prefix=settings.api_prefix)

    @router.post("/")
    async def create_donation(
        request: Request,
        background_tasks: BackgroundTasks,
        x_correlation_id: str | None = Header(default=None),
    ):
        """Charge one donation and record it when the sale settles.

        Responds with the gateway payload on success and `{"errors": [...]}`
        with status 500 otherwise.
        """

        trace_id_ctx.set(x_correlation_id or str(uuid4()))
        try:
            body = await request.json()
        except (JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("donation_body_unreadable error=%s", exc)
            body = None

        outcome = await service.charge(body)
        if outcome.record is not None:
            if settings.persist_mode == "background":
                background_tasks.add_task(service.persist, outcome.record)
            else:
                await service.persist(outcome.record)
        return JSONResponse(status_code=outcome.status_code, content=jsonable_encoder(outcome.body))

    app.include_router(router)

    @app.get("/metrics")
    def metrics():
        """Prometheus scrape endpoint."""

        return metrics_response()

    @app.get("/health")
    def health():
        """Container health probe endpoint."""

        return {"ok": True}

    return app
