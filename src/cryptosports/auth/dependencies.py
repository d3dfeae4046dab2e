"""FastAPI authentication dependencies."""

from __future__ import annotations

from fastapi import Depends, Request

from cryptosports.db.models import User
from cryptosports.db.store import MemoryStore
from cryptosports.dependencies import get_store
from cryptosports.errors import AuthenticationError

SESSION_USER_KEY = "user_id"


async def get_current_user(
    request: Request,
    store: MemoryStore = Depends(get_store),
) -> User:
    """
    Resolve the user bound to the session cookie.

    Raises 401 when there is no session or its user no longer exists.
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise AuthenticationError("Unauthorized")

    user = await store.get_user(int(user_id))
    if user is None:
        request.session.clear()
        raise AuthenticationError("Unauthorized")
    return user
