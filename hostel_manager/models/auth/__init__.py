from hostel_manager.models.auth.admin_user import AdminUser, RevokedToken

__all__ = ["AdminUser", "RevokedToken"]
