"""Middleware registration."""

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from cryptosports.config import Settings
from cryptosports.middleware.cors import setup_cors
from cryptosports.middleware.error_handler import setup_error_handlers
from cryptosports.middleware.logging import setup_logging
from cryptosports.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Install logging, error handlers and the middleware stack.

    Starlette wraps middleware in reverse order of registration. Sessions sit
    innermost so handlers see ``request.session``; CORS goes on last so its
    headers also reach 4xx responses.
    """
    setup_logging(settings)
    setup_error_handlers(app, settings)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age_seconds,
        same_site="lax",
        https_only=settings.is_production,
    )
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
