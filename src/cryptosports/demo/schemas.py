"""Response schema for the demo endpoint."""

from __future__ import annotations

from cryptosports.auth.schemas import UserResponse
from cryptosports.db.models import CamelModel


class DemoSetupResponse(CamelModel):
    message: str
    user: UserResponse
