"""
Authentication schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from hostel_manager.core.security import PrincipalRole
from hostel_manager.schemas.common.base import BaseSchema

__all__ = ["AdminLoginRequest", "ResidentLoginRequest", "TokenResponse", "Principal"]


class AdminLoginRequest(BaseSchema):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class ResidentLoginRequest(BaseSchema):
    """Blank values are rejected by the auth service, not here."""

    email: str = ""
    phone: str = ""


class TokenResponse(BaseSchema):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Seconds until expiry")
    role: PrincipalRole
    subject_id: str
    display_name: Optional[str] = None


class Principal(BaseSchema):
    """Authenticated caller decoded from a bearer token."""

    subject_id: str
    role: PrincipalRole
    token_id: str
    expires_at: int
