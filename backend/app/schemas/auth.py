"""Auth Schemas — Pydantic models for the login boundary.

Invariants:
    - CredentialsPayload.email: trimmed, lowercased, shaped like an address
    - CredentialsPayload.password: at least 6 chars
    - LoginRequest.redirect_to only accepts dashboard paths (no open redirects)

Design Decisions:
    - Credential shape is checked by the provider, not by FastAPI: a malformed
      payload must read as "Invalid credentials." rather than a 400
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.domain_types import DASHBOARD_PATH


class CredentialsPayload(BaseModel):
    """Credentials accepted by the credentials provider."""
    email: str = Field(
        max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
    )
    password: str = Field(min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class LoginRequest(BaseModel):
    """Login form submission — credentials are validated downstream."""
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = None
    password: str | None = None
    redirect_to: str | None = Field(None, alias="redirectTo")

    @field_validator("redirect_to")
    @classmethod
    def keep_dashboard_redirects(cls, v: str | None) -> str | None:
        if v and v.startswith(DASHBOARD_PATH):
            return v
        return None

    def credentials(self) -> dict:
        return {"email": self.email, "password": self.password}
