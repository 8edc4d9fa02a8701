"""
Main FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coordsuite import __version__
from coordsuite.api.convert import router as convert_router
from coordsuite.api.error_handlers import register_error_handlers
from coordsuite.api.middleware import RequestCorrelationMiddleware
from coordsuite.core.config import settings
from coordsuite.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Configure logging on startup.
    """
    setup_logging(log_file=settings.log_file, json_logs=(settings.environment == "production"))
    logger.info(f"Starting Coordinates Suite API v{__version__} in {settings.environment} mode")

    yield

    logger.info("Shutting down Coordinates Suite API")


app = FastAPI(
    title="Coordinates Suite API",
    description="Conversion between UTM and latitude/longitude coordinate lists",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestCorrelationMiddleware)

register_error_handlers(app)

app.include_router(convert_router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root() -> dict[str, str]:
    """
    Root endpoint returning API information.
    """
    return {
        "name": "Coordinates Suite API",
        "version": __version__,
        "description": "UTM and latitude/longitude conversion",
    }


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("coordsuite.api.main:app", host="0.0.0.0", port=settings.port)
