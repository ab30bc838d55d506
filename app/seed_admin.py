"""
Create the first administrator account.

    python -m app.seed_admin

Reads ADMIN_NAME / ADMIN_EMAIL / ADMIN_PASSWORD from settings. Does nothing
if an active account with that email already exists.
"""
import logging

from app.config import settings
from app.database import SessionLocal
from app.models.user import User, UserRole
from app.utils.security import hash_password

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def seed_admin(db) -> User:
    existing = db.query(User).filter(
        User.email == settings.ADMIN_EMAIL,
        User.deletedAt.is_(None),
    ).first()
    if existing:
        logger.info(f"Admin {settings.ADMIN_EMAIL} already exists (id={existing.id})")
        return existing

    admin = User(
        name=settings.ADMIN_NAME,
        email=settings.ADMIN_EMAIL,
        password=hash_password(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        isActive=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Created admin {admin.email} (id={admin.id})")
    return admin


if __name__ == "__main__":
    session = SessionLocal()
    try:
        seed_admin(session)
    finally:
        session.close()
