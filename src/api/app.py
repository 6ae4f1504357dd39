# This file assembles the FastAPI application: middleware, error handlers, and routers.
# Every request gets an `x-request-id` and `x-response-time-ms` header and is counted in Prometheus.
# Metrics are labelled by route template so `/ministries/{ministry_id}` stays one series.
# Operational routes and `/exec` are mounted at the root; everything else under the version prefix.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from src.api.api_config import get_api_config
from src.api.error_handlers import register_error_handlers
from src.api.routers.admins import router as admins_router
from src.api.routers.ai import router as ai_router
from src.api.routers.auth import router as auth_router
from src.api.routers.followups import router as followups_router
from src.api.routers.health import router as health_router
from src.api.routers.legacy import router as legacy_router
from src.api.routers.ministries import router as ministries_router
from src.api.routers.signups import router as signups_router
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)

REQUESTS_TOTAL = Counter(
    "signup_api_http_requests_total",
    "HTTP requests handled, by route and status.",
    ["method", "route", "status_code"],
)
REQUEST_SECONDS = Histogram(
    "signup_api_http_request_duration_seconds",
    "HTTP request latency in seconds, by route.",
    ["method", "route"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 15, 60),
)
INFLIGHT = Gauge(
    "signup_api_http_inflight_requests",
    "HTTP requests currently being handled.",
    ["method"],
)


def _route_label(request: Request) -> str:
    return getattr(request.scope.get("route"), "path", None) or request.url.path


def create_app() -> FastAPI:
    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Signup backend for a parish ministry fair. Ministries, signups, admins, and follow-up "
            "questionnaires are stored in a spreadsheet; AI data-entry helpers are proxied server-side."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "ministries", "description": "Ministry listings, tab scanning, and ministry edits."},
            {"name": "auth", "description": "Admin and ministry-leader role checks."},
            {"name": "signups", "description": "Signups, removals, and new parishioners."},
            {"name": "admins", "description": "Admin roster management."},
            {"name": "followups", "description": "Multi-round follow-up questions and responses."},
            {"name": "ai", "description": "Server-side proxy for AI data-entry helpers."},
            {"name": "legacy", "description": "Single-endpoint `?action=` contract used by the web app."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method = request.method
        started = time.perf_counter()
        status_code = 500
        INFLIGHT.labels(method=method).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{(time.perf_counter() - started) * 1000.0:.2f}"
            return response
        finally:
            elapsed = time.perf_counter() - started
            route = _route_label(request)
            INFLIGHT.labels(method=method).dec()
            REQUESTS_TOTAL.labels(method=method, route=route, status_code=str(status_code)).inc()
            REQUEST_SECONDS.labels(method=method, route=route).observe(elapsed)
            if config.enable_request_logging:
                logger.info(
                    "request_id=%s method=%s route=%s status=%s duration_ms=%.2f",
                    request_id,
                    method,
                    route,
                    status_code,
                    elapsed * 1000.0,
                )

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(legacy_router)
    app.include_router(ministries_router, prefix=config.api_version_path)
    app.include_router(auth_router, prefix=config.api_version_path)
    app.include_router(signups_router, prefix=config.api_version_path)
    app.include_router(admins_router, prefix=config.api_version_path)
    app.include_router(followups_router, prefix=config.api_version_path)
    app.include_router(ai_router, prefix=config.api_version_path)

    return app


app = create_app()
