"""Authorization Middleware — evaluates the authorization gate on every request.

Invariants:
    - Runs before routing, so no page-specific logic executes for a denied request
    - Authentication state = a valid session cookie; contents are attached to
      request.state.user but the decision only uses presence
    - deny → 303 to /login?callbackUrl=<requested path>
    - redirect → 303 to the decision's target (/dashboard)
    - Paths under settings.public_path_prefixes bypass the gate (health probes)

Design Decisions:
    - Decision logic lives in core/authorize_request.py; this module only
      reads the cookie and renders the decision as HTTP
"""

import logging
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from app.config import Settings
from app.core.authorize_request import authorize_request
from app.core.domain_types import GateAction, LOGIN_PATH
from app.infrastructure.session_tokens import read_session_token

logger = logging.getLogger(__name__)


def register_auth_gate(app: FastAPI, settings: Settings) -> None:
    """Install the authorization gate as HTTP middleware."""

    @app.middleware("http")
    async def authorization_gate(request: Request, call_next):
        path = request.url.path
        if is_public_path(path, settings.public_path_prefixes):
            return await call_next(request)

        user = read_session_token(
            request.cookies.get(settings.session_cookie_name),
            settings.auth_secret,
        )
        request.state.user = user
        decision = authorize_request(user is not None, path)
        if decision.allowed:
            return await call_next(request)

        if decision.action == GateAction.DENY:
            logger.info(
                f"Unauthenticated request to {path} sent to login",
                extra={"path": path, "decision": decision.action.value},
            )
            return RedirectResponse(
                login_redirect_url(request), status_code=303,
            )
        return RedirectResponse(decision.redirect_to, status_code=303)


def is_public_path(path: str, public_prefixes: list[str]) -> bool:
    return any(path.startswith(prefix) for prefix in public_prefixes)


def login_redirect_url(request: Request) -> str:
    """Login URL carrying the originally requested path as callbackUrl."""
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return f"{LOGIN_PATH}?{urlencode({'callbackUrl': target})}"
