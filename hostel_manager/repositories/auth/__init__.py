from hostel_manager.repositories.auth.admin_user_repository import (
    AdminUserRepository,
    RevokedTokenRepository,
)

__all__ = ["AdminUserRepository", "RevokedTokenRepository"]
