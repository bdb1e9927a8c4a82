"""Seed Command — creates a dashboard user with a bcrypt-hashed password.

Usage:
    python -m app.db.seed --email user@nextmail.com --name User --password 123456

Invariants:
    - Passwords are stored hashed, never plaintext
    - Seeding an existing email updates its name and password (idempotent)
"""

import argparse
import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import get_settings
from app.db.session import create_session_factory
from app.infrastructure.identity_provider import PasswordHasher
from app.infrastructure.observability import setup_logging
from app.models.user import User

logger = logging.getLogger(__name__)


async def seed_user(
    session_factory: async_sessionmaker[AsyncSession],
    email: str,
    name: str,
    password: str,
    hasher: PasswordHasher | None = None,
) -> User:
    """Insert or update a user by email."""
    hasher = hasher or PasswordHasher()
    email = email.strip().lower()
    async with session_factory() as db:
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(email=email, name=name, password=hasher.hash(password))
            db.add(user)
        else:
            user.name = name
            user.password = hasher.hash(password)
        await db.commit()
        await db.refresh(user)
    logger.info(f"Seeded user {email}", extra={"user_id": str(user.id)})
    return user


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or update a dashboard user.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    session_factory = create_session_factory(settings.database_url)
    asyncio.run(seed_user(session_factory, args.email, args.name, args.password))


if __name__ == "__main__":
    main()
