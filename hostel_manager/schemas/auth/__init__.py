from hostel_manager.schemas.auth.auth import (
    AdminLoginRequest,
    Principal,
    ResidentLoginRequest,
    TokenResponse,
)

__all__ = ["AdminLoginRequest", "ResidentLoginRequest", "TokenResponse", "Principal"]
