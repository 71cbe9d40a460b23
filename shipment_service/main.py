"""
Shipment Microservice
CRUD over shipment records, backed by a database or an in-memory store
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shipment_service.api.errors import register_exception_handlers
from shipment_service.api.routes import router as shipments_router
from shipment_service.core import RequestLoggingMiddleware, ServiceHealth, get_logger, setup_logging
from shipment_service.core_settings import Settings, get_settings
from shipment_service.infrastructure.factory import build_repository, dispose_repository

# Service configuration
SERVICE_NAME = "shipment-service"
SERVICE_DESCRIPTION = "Shipment records with database or in-memory persistence"

logger = get_logger(__name__)

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    setup_logging(
        service_name=SERVICE_NAME,
        level=settings.LOG_LEVEL,
        environment=settings.ENVIRONMENT,
        version=settings.SERVICE_VERSION,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management"""
        logger.info(f"Starting {SERVICE_NAME} version {settings.SERVICE_VERSION}")

        # Startup aborts here when a configured database cannot be reached
        repository = build_repository(settings)
        app.state.repository = repository
        logger.info(f"{SERVICE_NAME} started with {repository.mode} storage")

        try:
            yield
        finally:
            logger.info(f"Shutting down {SERVICE_NAME}")
            dispose_repository(repository)

    app = FastAPI(
        title=SERVICE_NAME,
        description=SERVICE_DESCRIPTION,
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    health_service = ServiceHealth(SERVICE_NAME, settings.SERVICE_VERSION)
    app.include_router(health_service.create_health_router())
    app.include_router(shipments_router)

    return app
