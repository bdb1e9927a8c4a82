"""Credential Exchange — wraps a sign-in attempt into a typed result.

Invariants:
    - AuthenticationError with type "CredentialsSignin" → CREDENTIALS_SIGNIN
    - Any other AuthenticationError → UNKNOWN
    - Any non-authentication exception propagates untouched (infrastructure
      faults stay visible instead of reading as bad credentials)

Design Decisions:
    - AuthOk/AuthErr result over exception-driven flow: bad credentials are an
      expected outcome, the login route branches on the value
    - Provider accessed through the IdentityProvider Protocol: the exchange
      never imports the DB-backed implementation
"""

from dataclasses import dataclass
from typing import Any, Mapping

from app.core.domain_types import AuthenticatedUser, AuthFailureKind
from app.core.errors import AuthenticationError, CREDENTIALS_SIGNIN
from app.core.repository_protocols import IdentityProvider

_FAILURE_MESSAGES = {
    AuthFailureKind.CREDENTIALS_SIGNIN: "Invalid credentials.",
    AuthFailureKind.UNKNOWN: "Something went wrong.",
}


@dataclass(frozen=True)
class AuthOk:
    user: AuthenticatedUser


@dataclass(frozen=True)
class AuthErr:
    kind: AuthFailureKind

    @property
    def message(self) -> str:
        return describe_auth_failure(self.kind)


AuthResult = AuthOk | AuthErr


def classify_auth_error(error: AuthenticationError) -> AuthFailureKind:
    if error.type == CREDENTIALS_SIGNIN:
        return AuthFailureKind.CREDENTIALS_SIGNIN
    return AuthFailureKind.UNKNOWN


def describe_auth_failure(kind: AuthFailureKind) -> str:
    """User-facing message for the login form."""
    return _FAILURE_MESSAGES[kind]


async def authenticate(
    provider: IdentityProvider,
    provider_name: str,
    credentials: Mapping[str, Any],
) -> AuthResult:
    """Delegate to the provider chain and fold auth failures into AuthErr."""
    try:
        user = await provider.sign_in(provider_name, credentials)
    except AuthenticationError as e:
        return AuthErr(classify_auth_error(e))
    return AuthOk(user)
