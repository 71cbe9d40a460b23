"""
Backing store selection.

Called once during application startup. The returned repository is used for
the whole lifetime of the process.
"""

from shipment_service.application.repository import ShipmentRepository
from shipment_service.core.logging_config import get_logger
from shipment_service.core_settings import Settings

from .db import build_engine, build_session_factory, init_models, ping, safe_url
from .memory_repository import InMemoryShipmentRepository
from .sql_repository import SqlShipmentRepository

logger = get_logger(__name__)


def build_repository(settings: Settings) -> ShipmentRepository:
    """
    Create the backing store for this process.

    Without DATABASE_URL the in-memory store is used. With DATABASE_URL the
    database must be reachable: connection or schema errors are logged and
    re-raised so that startup aborts. There is no fallback to memory once a
    database is configured.
    """
    if not settings.use_database:
        logger.info(
            "DATABASE_URL not set, using in-memory shipment store",
            extra={'extra_fields': {'storage': 'memory', 'seeded': settings.SEED_DEMO_SHIPMENT}}
        )
        return InMemoryShipmentRepository(seed=settings.SEED_DEMO_SHIPMENT)

    target = safe_url(settings.DATABASE_URL)
    logger.info(f"Connecting to database at {target}")
    try:
        engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
        ping(engine)
        init_models(engine)
    except Exception as e:
        logger.error(f"Failed to open database at {target}: {e}")
        raise
    logger.info("Database ready", extra={'extra_fields': {'storage': 'database'}})
    return SqlShipmentRepository(engine, build_session_factory(engine))


def dispose_repository(repository: ShipmentRepository) -> None:
    engine = getattr(repository, "engine", None)
    if engine is not None:
        engine.dispose()
