"""Shared FastAPI dependencies."""

from fastapi import Request

from cryptosports.db.store import MemoryStore


def get_store(request: Request) -> MemoryStore:
    """Return the application's entity store (FastAPI dependency)."""
    return request.app.state.store
