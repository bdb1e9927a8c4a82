"""Authorization Gate — decides whether a request proceeds, is denied, or is redirected.

Invariants:
    - PURE: no IO, no session inspection beyond the presence flag
    - Dashboard paths ("/dashboard" prefix) require authentication
    - Authenticated users on any other gated path are sent to the dashboard

Design Decisions:
    - Returns a GateDecision value (not an HTTP response): the middleware in
      api/auth_gate.py owns the translation to redirects
    - Prefix match is a plain startswith, so "/dashboard-archive" counts as a
      dashboard path too
"""

from dataclasses import dataclass

from app.core.domain_types import DASHBOARD_PATH, GateAction


@dataclass(frozen=True)
class GateDecision:
    action: GateAction
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.action == GateAction.ALLOW


ALLOW = GateDecision(GateAction.ALLOW)
DENY = GateDecision(GateAction.DENY)
REDIRECT_TO_DASHBOARD = GateDecision(GateAction.REDIRECT, DASHBOARD_PATH)


def is_dashboard_path(path: str) -> bool:
    return path.startswith(DASHBOARD_PATH)


def authorize_request(is_authenticated: bool, requested_path: str) -> GateDecision:
    """Map (authentication state, path) to allow / deny / redirect."""
    if is_dashboard_path(requested_path):
        return ALLOW if is_authenticated else DENY
    if is_authenticated:
        return REDIRECT_TO_DASHBOARD
    return ALLOW
