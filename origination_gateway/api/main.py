"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from origination_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from origination_gateway.api.v1 import identity, affordability, assessments, loans, insurance
from origination_gateway.infrastructure.observability.logging import setup_logging
from origination_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Origination Gateway",
        description="SA ID verification, NCA affordability, loan pricing and funeral cover quotes",
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
    app.include_router(identity.router, prefix="/v1", tags=["identity"])
    app.include_router(affordability.router, prefix="/v1", tags=["affordability"])
    app.include_router(assessments.router, prefix="/v1", tags=["affordability"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(insurance.router, prefix="/v1", tags=["insurance"])

    return app


app = create_app()
