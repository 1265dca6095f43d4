"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from budgetkollen.api.dependencies import get_request_id
from budgetkollen.api.middleware import RequestIDMiddleware, MetricsMiddleware
from budgetkollen.api.v1 import budget, compound_interest, forecast, tax
from budgetkollen.domain.exceptions import DomainException, TaxDataFetchError
from budgetkollen.infrastructure.observability.logging import setup_logging
from budgetkollen.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="BudgetKollen",
        description="Swedish household budget, tax, loan and savings calculations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Domain errors not handled by a router
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        request_id = get_request_id(request)
        if isinstance(exc, TaxDataFetchError):
            logging.error(f"Tax data service unavailable: {exc}", extra={"request_id": request_id})
            return JSONResponse(status_code=503, content={"detail": "Tax data service unavailable"})
        logging.error(f"Unhandled domain error: {exc}", extra={"request_id": request_id})
        return JSONResponse(status_code=500, content={"detail": "Internal calculation error"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(tax.router, prefix="/v1", tags=["tax"])
    app.include_router(budget.router, prefix="/v1", tags=["budget"])
    app.include_router(compound_interest.router, prefix="/v1", tags=["compound-interest"])
    app.include_router(forecast.router, prefix="/v1", tags=["forecast"])

    return app


app = create_app()
