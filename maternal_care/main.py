"""
ASGI entry point: ``uvicorn maternal_care.main:app``.

Configures logging and, when SENTRY_DSN is set, error reporting before the
application is built.
"""

import logging

import sentry_sdk

from maternal_care.config.settings import get_settings
from maternal_care.core.app_factory import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)
settings = get_settings()

if settings.SENTRY_DSN:
    sentry_sdk.init(dsn=settings.SENTRY_DSN, environment=settings.ENVIRONMENT, send_default_pii=False)
    logger.info("Sentry error reporting enabled")

app = create_app(settings)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("maternal_care.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
