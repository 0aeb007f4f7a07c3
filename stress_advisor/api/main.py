"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from stress_advisor.api.middleware import RequestIDMiddleware, MetricsMiddleware
from stress_advisor.api.v1 import summary, simulate, explain
from stress_advisor.infrastructure.observability.logging import setup_logging
from stress_advisor.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Household Stress Advisor",
        description="Financial stress scoring, what-if scenarios, and explanations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", "unknown")
        logging.error(f"Unexpected error: {exc}", extra={"request_id": request_id})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(summary.router, prefix="/v1", tags=["summary"])
    app.include_router(simulate.router, prefix="/v1", tags=["scenarios"])
    app.include_router(explain.router, prefix="/v1", tags=["explanations"])

    return app


app = create_app()
