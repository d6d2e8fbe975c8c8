"""
Security utilities: password hashing and JWT access tokens.
"""

import secrets
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from hostel_manager.config.settings import settings
from hostel_manager.core.exceptions import AuthenticationError, ErrorCode
from hostel_manager.core.logging import get_logger

logger = get_logger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class PrincipalRole(str, Enum):
    """Token subject roles"""
    ADMIN = "admin"
    RESIDENT = "resident"


class PasswordManager:
    """Password hashing and verification"""

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Malformed hashes count as a mismatch.
        """
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.error(f"Password verification failed: {str(e)}")
            return False


class TokenManager:
    """JWT token management utilities"""

    @staticmethod
    def create_access_token(
        subject: str,
        role: PrincipalRole,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed access token.

        Args:
            subject: Admin user id or resident id
            role: Principal role carried in the token
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
        payload = {
            "sub": subject,
            "role": role.value,
            "iat": now,
            "exp": expire,
            "jti": secrets.token_urlsafe(16),  # JWT ID for revocation
        }
        return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Raises:
            AuthenticationError: If the token is expired or invalid
        """
        try:
            return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired", ErrorCode.TOKEN_INVALID)
        except jwt.PyJWTError as e:
            logger.warning(f"Token verification failed: {str(e)}")
            raise AuthenticationError("Invalid token", ErrorCode.TOKEN_INVALID)


__all__ = ["PrincipalRole", "PasswordManager", "TokenManager", "pwd_context"]
