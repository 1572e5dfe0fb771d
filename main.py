"""Main entry point for the Virtual Shell Simulator (vshell) FastAPI application.

This module creates and configures the FastAPI app instance that hosts
sandboxed shell sessions over a REST API.

To run the development server:
    uvicorn main:app --reload

To run in production:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from pydantic import ValidationError

from api.config import ServiceSettings
from api.dependencies import (
    SessionManagerDep,
    initialize_session_manager,
    shutdown_session_manager,
)
from api.exceptions import (
    SessionLimitError,
    SessionNotFoundError,
    generic_exception_handler,
    runtime_error_handler,
    session_limit_handler,
    session_not_found_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import sessions as session_routes

__version__ = "0.1.0"

# Load .env before settings are read
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Startup reads the settings, configures logging and creates the shared
    SessionManager. Shutdown drops every remaining session.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = ServiceSettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("🚀 Starting vshell - Initializing SessionManager...")
    initialize_session_manager(settings)
    print(f"✅ SessionManager initialized (max {settings.max_sessions} sessions)")

    yield  # App runs and handles requests here

    print("🛑 Shutting down vshell - Closing sessions...")
    dropped = shutdown_session_manager()
    print(f"✅ Shutdown complete ({dropped} sessions closed)")


# Create the FastAPI application instance
app = FastAPI(
    title="Virtual Shell Simulator (vshell)",
    description="API hosting sandboxed POSIX-like shell sessions over in-memory filesystems",
    version=__version__,
    lifespan=lifespan,
)

# Register exception handlers
# Order matters: specific exceptions before general ones
app.add_exception_handler(SessionNotFoundError, session_not_found_handler)
app.add_exception_handler(SessionLimitError, session_limit_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(session_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Virtual Shell Simulator API",
        "version": __version__,
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check(manager: SessionManagerDep):
    """Health check endpoint for monitoring.

    Returns:
        The service status and the number of live sessions.
    """
    return {"status": "healthy", "sessions": len(manager)}
