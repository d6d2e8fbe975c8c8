"""Database initialization utilities."""
from sqlalchemy import select
from sqlalchemy.orm import Session

from hostel_manager.config.settings import settings
from hostel_manager.core.logging import get_logger
from hostel_manager.core.security import PasswordManager
from hostel_manager.models import AdminUser, Base

logger = get_logger(__name__)


def create_tables(engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)


def seed_admin(db: Session, email: str, password: str) -> AdminUser:
    """
    Ensure the bootstrap administrator exists.

    An existing account is left untouched, so a changed password survives
    restarts.
    """
    email = email.strip().lower()
    admin = db.execute(select(AdminUser).where(AdminUser.email == email)).scalar_one_or_none()
    if admin is not None:
        return admin

    admin = AdminUser(email=email, hashed_password=PasswordManager.hash_password(password))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Bootstrap admin account created", extra={"admin_email": email})
    return admin


def init_db() -> None:
    """
    Create tables and seed the bootstrap admin.

    Suitable for development and single-node deployments; schema migrations
    are not managed here.
    """
    from hostel_manager.db.session import SessionLocal, engine

    create_tables(engine)
    with SessionLocal() as db:
        seed_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    logger.info("Database initialized")
