"""
FastAPI dependencies: database session, authenticated principals and
per-request services.

Example usage in a router:
    @router.get("/me")
    def read_me(resident: Resident = Depends(deps.get_current_resident)):
        return resident
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from hostel_manager.core.exceptions import AuthenticationError, AuthorizationError, ErrorCode
from hostel_manager.core.logging import principal_id
from hostel_manager.core.security import PrincipalRole
from hostel_manager.db.session import get_db
from hostel_manager.models import Resident
from hostel_manager.schemas.auth import Principal
from hostel_manager.services.auth import AuthService
from hostel_manager.services.file import LogoService
from hostel_manager.services.integrations import TextGenerationService

http_bearer = HTTPBearer(auto_error=False)


# --- Authentication & Authorization -------------------------------------------

def get_current_principal(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    db: Session = Depends(get_db),
) -> Principal:
    if creds is None:
        raise AuthenticationError("Not authenticated", ErrorCode.TOKEN_INVALID)
    principal = AuthService(db).authenticate(creds.credentials).unwrap()
    principal_id.set(principal.subject_id)
    return principal


def get_admin_principal(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != PrincipalRole.ADMIN:
        raise AuthorizationError("Administrator access required")
    return principal


def get_current_resident(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> Resident:
    """The signed-in resident, re-checked as Active on every request."""
    if principal.role != PrincipalRole.RESIDENT:
        raise AuthorizationError("Resident access required")
    resident = db.get(Resident, principal.subject_id)
    if resident is None:
        raise AuthenticationError("Account no longer exists", ErrorCode.TOKEN_INVALID)
    if not resident.is_active:
        raise AuthenticationError("Your account has been deactivated", ErrorCode.ACCOUNT_DEACTIVATED)
    return resident


# --- Collaborators -------------------------------------------------------------

def get_text_generator() -> TextGenerationService:
    return TextGenerationService()


def get_logo_service() -> LogoService:
    return LogoService()


__all__ = [
    "get_db",
    "http_bearer",
    "get_current_principal",
    "get_admin_principal",
    "get_current_resident",
    "get_text_generator",
    "get_logo_service",
]
