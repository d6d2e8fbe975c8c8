"""
Admin account and revoked-token repositories.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hostel_manager.models import AdminUser, RevokedToken
from hostel_manager.repositories.base import BaseRepository


class AdminUserRepository(BaseRepository[AdminUser]):

    default_order_by = (AdminUser.email,)

    def __init__(self, session: Session):
        super().__init__(AdminUser, session)

    def find_by_email(self, email: str) -> Optional[AdminUser]:
        stmt = select(AdminUser).where(AdminUser.email == email.strip().lower())
        return self.db.execute(stmt).scalar_one_or_none()


class RevokedTokenRepository(BaseRepository[RevokedToken]):

    default_order_by = (RevokedToken.revoked_at.desc(),)

    def __init__(self, session: Session):
        super().__init__(RevokedToken, session)

    def is_revoked(self, jti: str) -> bool:
        stmt = select(RevokedToken.id).where(RevokedToken.jti == jti)
        return self.db.execute(stmt).first() is not None
