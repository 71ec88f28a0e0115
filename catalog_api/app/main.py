"""
Main entrypoint for the Catalog API.

This module assembles the FastAPI application, sets up logging, wires
the repositories and services and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn catalog_api.app.main:app --reload

The application title, version, route prefix and database location
are provided via ``Settings`` from ``core.config``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.db import get_database_path, init_db
from .core.exceptions import StoreUnavailableError
from .core.logging_config import setup_logging
from .core.metrics import MetricsRegistry
from .core.middleware import log_requests
from .repositories import ProductRepository, UserRepository
from .services.alert_service import AlertService
from .services.product_service import ProductService
from .services.user_service import UserService

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def _violation(error: dict) -> dict:
    """Reduce a Pydantic error to a ``{field, message}`` pair."""
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] in _LOCATION_PREFIXES:
        loc = loc[1:]
    message = error.get("msg", "")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return {"field": ".".join(loc), "message": message}


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = [_violation(error) for error in exc.errors()]
    logger.warning("Validation failed for %s %s: %s", request.method, request.url.path, violations)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": violations},
    )


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    request.app.state.alerts.alert_database_connection_issue(str(exc))
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": "Service temporarily unavailable"},
    )


def create_app(
    app_settings: Optional[Settings] = None,
    metrics: Optional[MetricsRegistry] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the environment derived defaults.
        Tests use this to point the app at a temporary database.
    metrics : Optional[MetricsRegistry]
        Counter registry shared by the services; a fresh one is created
        when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    cfg = app_settings or settings
    # Initialise logging before anything else so that the wiring below can
    # safely log messages.
    setup_logging(cfg.log_level, cfg.log_file or None)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, debug=cfg.debug)

    database_path = get_database_path(cfg.database_url)
    registry = metrics if metrics is not None else MetricsRegistry()
    app.state.settings = cfg
    app.state.database_path = database_path
    app.state.metrics = registry
    app.state.alerts = AlertService(registry)
    app.state.user_service = UserService(
        UserRepository(database_path, cfg.db_timeout_seconds), registry
    )
    app.state.product_service = ProductService(
        ProductRepository(database_path, cfg.db_timeout_seconds), registry
    )

    app.middleware("http")(log_requests)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)

    app.include_router(v1_router, prefix=cfg.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Apply migrations at startup.  This will create the database
        # file if it does not exist and ensure all tables are up to date.
        init_db(database_path)
        logger.info("Database ready at %s", database_path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
