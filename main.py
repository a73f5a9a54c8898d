"""Main entry point for the virtual filesystem FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API over the event-sourced virtual filesystem.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import get_settings, initialize_filesystem, shutdown_filesystem
from api.exceptions import (
    ExecutionDisabledError,
    execution_disabled_handler,
    generic_exception_handler,
    validation_exception_handler,
    vfs_error_handler,
)
from api.routes import events as events_routes
from api.routes import fs as fs_routes
from vfs.errors import VFSError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    At startup the filesystem is created and, when Redis is configured,
    restored from the stored event history. At shutdown the transport is
    closed.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting virtual filesystem service")
    fs = initialize_filesystem(settings)
    logger.info(f"Filesystem ready: {fs.summary}")

    yield  # App runs and handles requests here

    logger.info("Shutting down virtual filesystem service")
    shutdown_filesystem()


# Create the FastAPI application instance
app = FastAPI(
    title="Event-Sourced Virtual Filesystem",
    description="API for an in-process hierarchical filesystem persisted as an event log",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Order matters: specific exceptions before general ones
app.add_exception_handler(VFSError, vfs_error_handler)
app.add_exception_handler(ExecutionDisabledError, execution_disabled_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(fs_routes.router)
app.include_router(events_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Event-Sourced Virtual Filesystem API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}
