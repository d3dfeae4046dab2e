"""Demo account endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cryptosports.auth.schemas import UserResponse
from cryptosports.config import Settings, get_settings
from cryptosports.db.store import MemoryStore
from cryptosports.demo.schemas import DemoSetupResponse
from cryptosports.demo.service import setup_demo_account
from cryptosports.dependencies import get_store

router = APIRouter(prefix="/api/demo", tags=["Demo"])


@router.get("/setup", response_model=DemoSetupResponse)
async def demo_setup(
    store: MemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Create (once) and return the demo account."""
    user, _created = await setup_demo_account(store, settings)
    return DemoSetupResponse(
        message="Demo account ready",
        user=UserResponse(id=user.id, username=user.username, email=user.email),
    )
