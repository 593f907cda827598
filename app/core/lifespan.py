"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, Firestore
client, reference-data cache, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Firestore client (if configured), cache (Redis
    if enabled, otherwise in-memory), telemetry (if enabled). Shutdown order:
    Firestore client close, cache disconnect, telemetry shutdown.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()

    from app.infrastructure.firebase import init_firebase

    if settings.firestore_configured:
        if not init_firebase():
            logger.warning("Firestore credentials set but initialization failed; search returns 503")
    else:
        logger.warning("Firestore not configured; search endpoints return 503")

    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        from app.infrastructure.cache.memory_cache import MemoryCache

        app.state.cache = MemoryCache(default_ttl=settings.cache_ttl_subjects)

    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        if settings.redis_enabled:
            telemetry.instrument_redis()
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    from app.infrastructure.firebase import close_firebase

    await close_firebase()

    cache = getattr(app.state, "cache", None)
    if cache is not None and hasattr(cache, "disconnect"):
        await cache.disconnect()
        logger.info("Cache disconnected")
    app.state.cache = None

    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
