"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from tenant_insights.api.middleware import MetricsMiddleware, RequestIDMiddleware
from tenant_insights.api.v1 import reports, screening, tenants
from tenant_insights.config import settings
from tenant_insights.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Tenant Insights Gateway",
        description="Tenant behavior scoring, screening and reporting for landlords",
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

    # Register API routers; the static /stats route is registered before /{tenant_id}
    app.include_router(tenants.router, prefix="/v1", tags=["tenants"])
    app.include_router(screening.router, prefix="/v1", tags=["screening"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()
