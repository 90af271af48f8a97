"""
Main entrypoint for the Social Events API.

This module assembles the FastAPI application: logging, CORS, the
exception handlers, the database readiness gate and the routers.
``create_app`` builds and configures the app; it is instantiated at
module import time as ``app`` so it can be served directly::

    uvicorn social_events_api.app.main:app --reload

Serverless hosts import the same ``app`` object.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api.router import router
from .core.config import settings
from .core.db import MongoStore
from .core.errors import StoreUnavailable, error_response, register_exception_handlers
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def create_app(store: Optional[MongoStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[MongoStore]
        The store to serve requests from.  Defaults to one built from
        ``settings``; tests pass a store wrapping a ``mongomock`` client.

    Returns
    -------
    FastAPI
        A configured application.  The store is connected by the
        startup handler; until it is ready every request is answered
        with a 500.
    """
    # Initialise logging before anything else so that the startup
    # handler below can log the connection outcome.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.store = store if store is not None else MongoStore()

    register_exception_handlers(app)

    @app.middleware("http")
    async def require_ready_store(request: Request, call_next):
        try:
            request.app.state.store.require_ready()
        except StoreUnavailable as exc:
            logger.error("Rejecting %s %s: %s", request.method, request.url.path, exc.error)
            return error_response(exc)
        return await call_next(request)

    # Added after the readiness gate so that it wraps it and rejected
    # responses still carry CORS headers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.on_event("startup")
    def connect_store() -> None:
        app.state.store.connect()

    @app.on_event("shutdown")
    def close_store() -> None:
        app.state.store.close()

    return app


# Create the application instance at import time so that uvicorn and
# serverless hosts can discover it without calling create_app.
app = create_app()
