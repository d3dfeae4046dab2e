"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from cryptosports.achievements.router import router as achievements_router
from cryptosports.auth.router import router as auth_router
from cryptosports.config import get_settings
from cryptosports.db.seed import seed_admin_user, seed_reference_data
from cryptosports.db.store import MemoryStore
from cryptosports.demo.router import router as demo_router
from cryptosports.middleware import setup_middleware
from cryptosports.players.router import router as players_router
from cryptosports.portfolio.router import router as portfolio_router
from cryptosports.staking.router import router as staking_router
from cryptosports.trading.router import router as trading_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    store: MemoryStore = app.state.store

    # Seeding is idempotent; a store handed in by the caller may already hold data
    await seed_reference_data(store)
    if settings.seed_admin:
        await seed_admin_user(store, settings)
    logger.info("store_ready", environment=settings.environment)

    yield


def create_app(store: MemoryStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Crypto Sports API",
        description="Backend API for the Crypto Sports player-token marketplace",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else MemoryStore()

    setup_middleware(app, settings)
    app.include_router(auth_router)
    app.include_router(players_router)
    app.include_router(trading_router)
    app.include_router(staking_router)
    app.include_router(portfolio_router)
    app.include_router(achievements_router)
    app.include_router(demo_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(app, host=_settings.host, port=_settings.port)
