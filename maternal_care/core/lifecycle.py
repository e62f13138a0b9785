"""
Startup and shutdown of the background reminder machinery.

On startup the reminder scheduler is started (unless disabled); on shutdown
it is stopped before the database engine is disposed so no job runs against
a closed pool.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from maternal_care.config.settings import Settings, get_settings
from maternal_care.core.container import get_container
from maternal_care.database.async_db import close_async_engine
from maternal_care.domains.maternal_health.infrastructure.scheduler import (
    get_reminder_scheduler,
    shutdown_scheduler,
)

logger = logging.getLogger(__name__)

# Setting that must be present for each channel to deliver anything
CHANNEL_CREDENTIALS = {
    "whatsapp": "WHATSAPP_ACCESS_TOKEN",
    "sms": "TWILIO_ACCOUNT_SID",
}


def warn_unconfigured_channels(settings: Settings) -> list[str]:
    """Log and return the selected channels that lack credentials."""
    missing = [
        channel
        for channel in settings.notification_channels
        if not getattr(settings, CHANNEL_CREDENTIALS[channel], None)
    ]
    for channel in missing:
        logger.warning(f"{CHANNEL_CREDENTIALS[channel]} not set, {channel} reminders will fail over")
    return missing


class LifecycleManager:
    """Idempotent start/stop of the reminder scheduler."""

    def __init__(self) -> None:
        self._started = False

    async def startup(self) -> None:
        if self._started:
            logger.warning("Startup requested twice, ignoring")
            return

        settings = get_settings()
        warn_unconfigured_channels(settings)

        if not settings.REMINDER_SCHEDULER_ENABLED:
            logger.info("Reminder scheduler disabled (REMINDER_SCHEDULER_ENABLED=false)")
        else:
            jobs = get_container().create_reminder_jobs()
            await get_reminder_scheduler(jobs, settings).start()
            if settings.DAILY_TIPS_ENABLED:
                logger.info(f"Daily tips scheduled using {settings.OLLAMA_API_MODEL}")

        self._started = True
        logger.info(f"{settings.PROJECT_NAME} started in {settings.ENVIRONMENT}")

    async def shutdown(self) -> None:
        if not self._started:
            logger.warning("Shutdown requested before startup, ignoring")
            return

        await shutdown_scheduler()
        await close_async_engine()
        self._started = False
        logger.info("Reminder scheduler and database engine stopped")


_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """FastAPI lifespan hook wrapping the global LifecycleManager."""
    lifecycle = get_lifecycle_manager()
    await lifecycle.startup()
    try:
        yield
    finally:
        await lifecycle.shutdown()
