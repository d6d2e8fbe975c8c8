"""
Authentication for the two principal kinds.

Admins sign in with email and password. Residents sign in with the email
and phone number stored on their record; the lookup can match several
rows, and more than one match is refused rather than resolved by picking
one.
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.config.settings import settings
from hostel_manager.core.exceptions import AuthenticationError, ErrorCode
from hostel_manager.core.security import PasswordManager, PrincipalRole, TokenManager
from hostel_manager.models import RevokedToken
from hostel_manager.repositories.auth import AdminUserRepository, RevokedTokenRepository
from hostel_manager.repositories.resident import ResidentRepository
from hostel_manager.schemas.auth import Principal, TokenResponse
from hostel_manager.services.base import BaseService, ServiceResult


class AuthService(BaseService):

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.admins = AdminUserRepository(db_session)
        self.residents = ResidentRepository(db_session)
        self.revoked = RevokedTokenRepository(db_session)

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    def admin_login(self, email: str, password: str) -> ServiceResult[TokenResponse]:
        email = self._sanitize_email(email)
        try:
            admin = self.admins.find_by_email(email)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "admin login", email)

        if admin is None or not PasswordManager.verify_password(password, admin.hashed_password):
            self._logger.warning("Failed admin login", extra={"login_email": email})
            return ServiceResult.auth_failure("Invalid email or password")
        if not admin.is_active:
            return ServiceResult.auth_failure("Account is deactivated", ErrorCode.ACCOUNT_DEACTIVATED)

        self._logger.info(f"Admin signed in: {admin.id}")
        return ServiceResult.success(self._issue(admin.id, PrincipalRole.ADMIN, admin.email))

    def resident_login(self, email: str, phone: str) -> ServiceResult[TokenResponse]:
        email = self._sanitize_email(email)
        phone = (phone or "").strip()
        if not email or not phone:
            return ServiceResult.validation_failure(
                "Email and phone number are required",
                code=ErrorCode.MISSING_REQUIRED_FIELD,
                details={"missing": [name for name, value in (("email", email), ("phone", phone)) if not value]},
            )

        try:
            matches = self.residents.find_by_credentials(email, phone)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "resident login", email)

        if not matches:
            self._logger.warning("Failed resident login", extra={"login_email": email})
            return ServiceResult.auth_failure("Invalid email or phone number")
        if len(matches) > 1:
            self._logger.warning(
                "Resident login matched several accounts",
                extra={"login_email": email, "match_count": len(matches)},
            )
            return ServiceResult.conflict(
                "Duplicate account found. Please contact administration.",
                details={"match_count": len(matches)},
                code=ErrorCode.DUPLICATE_ACCOUNT,
            )

        resident = matches[0]
        if not resident.is_active:
            return ServiceResult.auth_failure(
                "Your account has been deactivated. Please contact administration.",
                ErrorCode.ACCOUNT_DEACTIVATED,
            )

        self._logger.info(f"Resident signed in: {resident.id}")
        return ServiceResult.success(self._issue(resident.id, PrincipalRole.RESIDENT, resident.name))

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def authenticate(self, token: str) -> ServiceResult[Principal]:
        """Decode a bearer token and reject it once revoked."""
        try:
            payload = TokenManager.decode_token(token)
            principal = Principal(
                subject_id=payload["sub"],
                role=PrincipalRole(payload["role"]),
                token_id=payload["jti"],
                expires_at=int(payload["exp"]),
            )
        except AuthenticationError as e:
            return ServiceResult.auth_failure(e.message, ErrorCode.TOKEN_INVALID)
        except (KeyError, ValueError):
            return ServiceResult.auth_failure("Invalid token", ErrorCode.TOKEN_INVALID)

        try:
            if self.revoked.is_revoked(principal.token_id):
                return ServiceResult.auth_failure("Token has been revoked", ErrorCode.TOKEN_INVALID)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "check token revocation")
        return ServiceResult.success(principal)

    def logout(self, principal: Principal) -> ServiceResult[bool]:
        """Revoke the caller's token; repeating the call is harmless."""
        try:
            with self.transaction():
                if not self.revoked.is_revoked(principal.token_id):
                    self.revoked.create(RevokedToken(jti=principal.token_id))
            self._logger.info(f"Signed out: {principal.subject_id}")
            return ServiceResult.success(True, message="Logged out successfully")
        except IntegrityError:
            # A concurrent logout already stored this token id
            return ServiceResult.success(True, message="Logged out successfully")
        except SQLAlchemyError as e:
            return self._handle_exception(e, "logout", principal.subject_id)

    @staticmethod
    def _issue(subject_id: str, role: PrincipalRole, display_name: Optional[str]) -> TokenResponse:
        minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        return TokenResponse(
            access_token=TokenManager.create_access_token(subject_id, role, timedelta(minutes=minutes)),
            expires_in=minutes * 60,
            role=role,
            subject_id=subject_id,
            display_name=display_name,
        )

    @staticmethod
    def _sanitize_email(email: str) -> str:
        return email.strip().lower() if email else ""
