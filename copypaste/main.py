"""
FastAPI application entrypoint for the copy/paste sign-in server.
"""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from copypaste.api.routes import router
from copypaste.core.config import get_settings
from copypaste.core.errors import install_error_handlers
from copypaste.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Copy Paste",
        version="0.1.0",
        description="Google sign-in demo with a per-user copy/paste record.",
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session.secret_key or settings.google.client_secret,
        session_cookie=settings.session.cookie_name,
        max_age=settings.session.max_age_seconds,
        https_only=settings.session.https_only,
    )
    install_error_handlers(app)
    app.include_router(router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
