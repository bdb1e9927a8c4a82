"""Login & Logout — credential exchange and session cookie lifecycle.

Invariants:
    - Failed sign-in → 401 with one of two fixed messages, no cookie set
    - Successful sign-in → session cookie (HttpOnly, SameSite=lax) and 303 to
      redirectTo (dashboard paths only) or /dashboard
    - Infrastructure faults during sign-in propagate to the global handlers
    - Logout clears the cookie and 303s to /login

Design Decisions:
    - Login credentials arrive as JSON; the credentials provider validates
      their shape so malformed input reads as "Invalid credentials."
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.config import Settings, get_settings
from app.core.domain_types import DASHBOARD_PATH, LOGIN_PATH
from app.infrastructure.identity_provider import (
    IdentityProviderChain, get_identity_provider,
)
from app.infrastructure.session_tokens import issue_session_token
from app.schemas.auth import LoginRequest
from app.services.credential_exchange import AuthErr, authenticate

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.get(LOGIN_PATH)
async def login_page(callback_url: str | None = Query(None, alias="callbackUrl")):
    """Login form descriptor for unauthenticated visitors."""
    return {
        "page": "login",
        "fields": ["email", "password"],
        "callbackUrl": callback_url,
    }


@router.post(LOGIN_PATH)
async def login(
    body: LoginRequest,
    provider: IdentityProviderChain = Depends(get_identity_provider),
    settings: Settings = Depends(get_settings),
):
    """Exchange credentials for a session cookie."""
    result = await authenticate(provider, "credentials", body.credentials())
    if isinstance(result, AuthErr):
        logger.warning(f"Sign-in failed ({result.kind.value})")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": result.message},
        )

    token = issue_session_token(
        result.user, settings.auth_secret, settings.session_max_age_seconds,
    )
    response = RedirectResponse(
        body.redirect_to or DASHBOARD_PATH,
        status_code=status.HTTP_303_SEE_OTHER,
    )
    response.set_cookie(
        settings.session_cookie_name, token,
        max_age=settings.session_max_age_seconds,
        httponly=True, samesite="lax",
    )
    logger.info("User signed in", extra={"user_id": result.user.id})
    return response


@router.post(f"{DASHBOARD_PATH}/logout")
async def logout(settings: Settings = Depends(get_settings)):
    """Clear the session cookie."""
    response = RedirectResponse(
        LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER,
    )
    response.delete_cookie(settings.session_cookie_name)
    return response
