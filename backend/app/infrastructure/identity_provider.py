"""Identity Provider Chain — credentials sign-in against the users table.

Invariants:
    - Unknown provider name → AuthenticationError("Configuration")
    - Malformed payload, unknown email, or password mismatch →
      AuthenticationError("CredentialsSignin"); the three are indistinguishable
    - Database failures are NOT caught here: they propagate as infrastructure faults

Design Decisions:
    - bcrypt hashes with a configurable cost factor; verify never raises on a
      corrupt hash (reads as mismatch)
    - Providers registered explicitly in a dict (no auto-discovery)
"""

import logging
from typing import Any, Mapping, Protocol

import bcrypt
from fastapi import Depends
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import AuthenticatedUser
from app.core.errors import AuthenticationError, CONFIGURATION, CREDENTIALS_SIGNIN
from app.infrastructure.database import get_db
from app.models.user import User
from app.schemas.auth import CredentialsPayload

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Bcrypt password hashing utility."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8"),
            )
        except ValueError as e:
            logger.error(f"Password verification failed: {e}")
            return False


class CredentialsAuthorizer(Protocol):
    name: str

    async def authorize(
        self, credentials: Mapping[str, Any],
    ) -> AuthenticatedUser: ...


class CredentialsProvider:
    """Email + password provider backed by the users table."""

    name = "credentials"

    def __init__(self, db: AsyncSession, hasher: PasswordHasher | None = None):
        self.db = db
        self.hasher = hasher or PasswordHasher()

    async def authorize(
        self, credentials: Mapping[str, Any],
    ) -> AuthenticatedUser:
        try:
            payload = CredentialsPayload.model_validate(dict(credentials))
        except ValidationError:
            raise AuthenticationError(CREDENTIALS_SIGNIN)

        result = await self.db.execute(
            select(User).where(User.email == payload.email),
        )
        user = result.scalar_one_or_none()
        if not user or not self.hasher.verify(payload.password, user.password):
            raise AuthenticationError(CREDENTIALS_SIGNIN)

        return AuthenticatedUser(
            id=str(user.id), email=user.email, name=user.name,
        )


class IdentityProviderChain:
    """Dispatches sign-in attempts to a provider by name."""

    def __init__(self, providers: list[CredentialsAuthorizer]):
        self._providers = {p.name: p for p in providers}

    async def sign_in(
        self, provider_name: str, credentials: Mapping[str, Any],
    ) -> AuthenticatedUser:
        provider = self._providers.get(provider_name)
        if provider is None:
            raise AuthenticationError(
                CONFIGURATION, f"Unknown identity provider '{provider_name}'",
            )
        return await provider.authorize(credentials)


def get_identity_provider(
    db: AsyncSession = Depends(get_db),
) -> IdentityProviderChain:
    """FastAPI dependency for the request-scoped provider chain."""
    return IdentityProviderChain([CredentialsProvider(db)])
