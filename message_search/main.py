"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
Settings are loaded inside create_app() so that tests can set env (and
optionally clear the get_settings cache) before calling create_app().

Run locally: uvicorn message_search.main:app
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from message_search.api.v1 import api_router
from message_search.core.config import get_settings
from message_search.core.exception_handlers import register_exception_handlers
from message_search.core.lifespan import create_lifespan


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
