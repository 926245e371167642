"""
ASGI entry point.

    uvicorn raas.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from raas import __version__
from raas.api.v1 import api_router
from raas.api.v1.error_handlers import register_exception_handlers
from raas.config import Settings, get_settings
from raas.core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        logger.info("app.startup", extra={"env": settings.ENV, "version": __version__})
        try:
            yield
        finally:
            logger.info("app.shutdown")
            stop_queue_logging()

    app = FastAPI(title="RAAS back-office", version=__version__, lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
