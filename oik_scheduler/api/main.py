"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from oik_scheduler.api.middleware import MetricsMiddleware, RequestIDMiddleware
from oik_scheduler.api.v1 import budget, cache, installments, regime, upcoming
from oik_scheduler.config import settings
from oik_scheduler.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="OIK Obligation Scheduler",
        description="Due date projection, installment schedules and budget reconciliation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(upcoming.router, prefix="/v1", tags=["upcoming"])
    app.include_router(installments.router, prefix="/v1", tags=["installments"])
    app.include_router(budget.router, prefix="/v1", tags=["budget"])
    app.include_router(regime.router, prefix="/v1", tags=["regime"])
    app.include_router(cache.router, prefix="/v1", tags=["cache"])

    return app


app = create_app()
