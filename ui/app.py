"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import load_config
from core.health import (
    HealthChecker,
    check_event_loop,
    create_clock_check,
    create_codec_check,
)
from internal.logging import get_logger, parse_level, StructuredLogger
from utils.crash import create_async_handler
from ui.routes import health, tids

VERSION = "1.0.0"


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=parse_level(config.logging.level))
    logger_instance = get_logger()

    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("clock", create_clock_check(), critical=True)
    health_checker.register("codec", create_codec_check(config.codec.default_version), critical=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=VERSION,
                             default_version=config.codec.default_version,
                             keyed_derivation=bool(config.codec.secret))
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        yield
        logger_instance.info("Application shutdown complete")

    app = FastAPI(
        title="Tid",
        version=VERSION,
        description="compact, sortable, human-readable 63-bit identifiers",
        lifespan=lifespan,
    )

    # Initialize route modules with dependencies
    tids.init(config.codec)
    health.init(health_checker, config.codec)

    app.include_router(tids.router)
    app.include_router(health.router)

    return app
