"""
Authentication business logic.

Handles user registration and credential checks against the entity store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from cryptosports.auth.password import hash_password, validate_password_strength, verify_password
from cryptosports.db.models import User
from cryptosports.errors import AuthenticationError, ValidationError

if TYPE_CHECKING:
    from cryptosports.db.store import MemoryStore

logger = structlog.get_logger()


async def register_user(
    store: MemoryStore,
    username: str,
    password: str,
    email: str,
    wallet_address: str | None = None,
) -> User:
    """
    Register a new user with a hashed password.

    Raises:
        ValidationError: If the username is taken.
        PasswordStrengthError: If the password is too weak.
    """
    validate_password_strength(password)

    if await store.get_user_by_username(username) is not None:
        logger.info("registration_rejected", username=username, reason="username_taken")
        raise ValidationError("Username already exists")

    user = await store.create_user(
        username=username,
        password_hash=hash_password(password),
        email=email,
        wallet_address=wallet_address,
    )
    logger.info("user_created", user_id=user.id, username=username)
    return user


async def authenticate_user(store: MemoryStore, username: str, password: str) -> User:
    """
    Check a username/password pair.

    The same message is used for unknown users and wrong passwords.
    """
    user = await store.get_user_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_failed", username=username)
        raise AuthenticationError("Invalid username or password")
    logger.info("login_succeeded", user_id=user.id)
    return user
