"""
FastAPI application entry point for the Study Helper backend.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from study_helper.api.dependencies import get_orchestrator
from study_helper.api.error_handlers import EXCEPTION_HANDLERS
from study_helper.api.middleware import RequestTracingMiddleware
from study_helper.api.routes import router
from study_helper.config import settings
from study_helper.logging_config import configure_logging

# Configure structured logging before the app is built
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Topic explanations and problem solving with provider fallback, caching and backoff",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Sits inside CORS; every routed request gets a request_id
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["study-helper"])


@app.on_event("startup")
async def startup():
    """Build the orchestrator eagerly so configuration problems surface at boot."""
    orchestrator = get_orchestrator()
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        port=settings.PORT,
        primary_configured=orchestrator.primary.is_configured,
        secondary_configured=orchestrator.has_secondary(),
        cache_ttl_seconds=settings.CACHE_TTL_SECONDS,
    )


@app.on_event("shutdown")
async def shutdown():
    """Close provider connection pools."""
    logger.info("Application shutdown")
    await get_orchestrator().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Service banner with links to docs, health and metrics."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/api/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    import uvicorn
    
    uvicorn.run(
        "study_helper.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
