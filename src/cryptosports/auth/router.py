"""Authentication router: session-cookie login under /api and /api/auth."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request, Response

from cryptosports.auth.dependencies import SESSION_USER_KEY, get_current_user
from cryptosports.auth.password import PasswordStrengthError
from cryptosports.auth.schemas import LoginRequest, RegisterRequest, UserResponse
from cryptosports.auth.service import authenticate_user, register_user
from cryptosports.db.models import User
from cryptosports.db.store import MemoryStore
from cryptosports.dependencies import get_store
from cryptosports.errors import ValidationError

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["Authentication"])


def _user_response(user: User) -> UserResponse:
    """Build a UserResponse from a User record."""
    return UserResponse(id=user.id, username=user.username, email=user.email)


@router.post("/register", response_model=UserResponse, status_code=201)
@router.post("/auth/register", response_model=UserResponse, status_code=201)
async def register(
    body: RegisterRequest,
    request: Request,
    store: MemoryStore = Depends(get_store),
) -> UserResponse:
    """Register a new account and log it in."""
    try:
        user = await register_user(
            store,
            username=body.username,
            password=body.password,
            email=body.email,
            wallet_address=body.wallet_address,
        )
    except PasswordStrengthError as e:
        raise ValidationError(str(e)) from e

    request.session[SESSION_USER_KEY] = user.id
    return _user_response(user)


@router.post("/login", response_model=UserResponse)
@router.post("/auth/login", response_model=UserResponse)
async def login(
    body: LoginRequest,
    request: Request,
    store: MemoryStore = Depends(get_store),
) -> UserResponse:
    """Check credentials and start a session."""
    user = await authenticate_user(store, body.username, body.password)
    request.session[SESSION_USER_KEY] = user.id
    return _user_response(user)


@router.post("/logout")
@router.post("/auth/logout")
async def logout(request: Request) -> Response:
    """End the current session (no-op when not logged in)."""
    user_id = request.session.get(SESSION_USER_KEY)
    request.session.clear()
    logger.info("logout", user_id=user_id)
    return Response(status_code=200)


@router.get("/user", response_model=UserResponse)
@router.get("/auth/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    """Return the logged-in user."""
    return _user_response(user)
