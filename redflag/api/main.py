"""FastAPI application factory"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import JSONResponse, Response

from redflag.api.middleware import RequestIDMiddleware, MetricsMiddleware
from redflag.api.v1 import analysis, scans
from redflag.infrastructure.database.models import Base
from redflag.infrastructure.database.session import engine
from redflag.infrastructure.observability.logging import setup_logging
from redflag.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="RedFlag QoE Engine",
        description="Quality of Earnings red-flag analysis service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Scan store has no migrations yet
    Base.metadata.create_all(bind=engine)

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

    # Rejected values may be NaN/Infinity, which strict JSON cannot carry
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [{k: v for k, v in e.items() if k not in ("input", "ctx")} for e in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

    # Register API routers
    app.include_router(analysis.router, prefix="/v1", tags=["analysis"])
    app.include_router(scans.router, prefix="/v1", tags=["scans"])

    return app


app = create_app()
