"""Domain error hierarchy.

Every error carries a user-facing message and the HTTP status the global
handler answers with. Services raise these; routers let them propagate.
"""

from __future__ import annotations


class MarketError(Exception):
    """Base class for all marketplace errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, str]:
        return {"message": self.message}


class ValidationError(MarketError):
    """Missing or malformed input."""

    status_code = 400


class NotFoundError(MarketError):
    """Unknown user, player, holding, plan or achievement."""

    status_code = 404


class BusinessRuleViolation(MarketError):
    """Request is well-formed but breaks a ledger rule (insufficient tokens, lock period, ...)."""

    status_code = 400


class AuthenticationError(MarketError):
    """Bad credentials or no active session."""

    status_code = 401
