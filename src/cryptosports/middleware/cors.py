"""CORS for the browser client."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cryptosports.config import Settings

# Vite and friends pick a free port on localhost during development
_DEV_ORIGIN_REGEX = r"^http://(localhost|127\.0\.0\.1):\d+$"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the configured client origins to send the session cookie."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=None if settings.is_production else _DEV_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-Id"],
        expose_headers=["X-Request-Id"],
    )
