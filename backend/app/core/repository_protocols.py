"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Async in Protocol: implementations do IO, but the pure functions in
      core/ never await them — the services layer orchestrates the calls
"""

from typing import Any, Mapping, Protocol

from app.core.domain_types import AuthenticatedUser


class IdentityProvider(Protocol):
    """Contract for the sign-in provider chain — implemented by infrastructure.

    Raises AuthenticationError(type) when the provider rejects the attempt.
    Any other exception is an infrastructure fault.
    """
    async def sign_in(
        self, provider_name: str, credentials: Mapping[str, Any],
    ) -> AuthenticatedUser: ...
