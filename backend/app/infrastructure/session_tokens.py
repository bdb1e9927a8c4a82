"""Session Tokens — signed JWT carried in the session cookie.

Invariants:
    - Tokens are HS256-signed with settings.auth_secret and always carry `exp`
    - read_session_token never raises on a bad token: invalid, expired, or
      tampered tokens read as "no session"

Design Decisions:
    - Stateless JWT cookie over a server-side session table: the gate only
      needs presence, and no request has to touch the DB to decide it
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from app.core.domain_types import AuthenticatedUser

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def issue_session_token(
    user: AuthenticatedUser, secret: str, max_age_seconds: int,
) -> str:
    """Create a signed token for an authenticated user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "iat": now,
        "exp": now + timedelta(seconds=max_age_seconds),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def read_session_token(token: str | None, secret: str) -> AuthenticatedUser | None:
    """Decode a session token; None when absent or invalid."""
    if not token:
        return None
    try:
        claims = jwt.decode(
            token, secret, algorithms=[ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected session token: {e}")
        return None
    return AuthenticatedUser(
        id=claims["sub"],
        email=claims.get("email", ""),
        name=claims.get("name", ""),
    )
