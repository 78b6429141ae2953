"""
Provision the default admin account.

Run once after migrations (safe to re-run; an existing admin is left alone):

    python seed.py

Reads ADMIN_NAME, ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_PHONE, ADMIN_POSITION and
ADMIN_START_DATE from the environment / .env. The API never creates accounts on
startup.
"""
import logging
import sys

from attendance_tracker.core.clock import get_now
from attendance_tracker.core.config import settings
from attendance_tracker.core.security import get_password_hash
from attendance_tracker.db.session import SessionLocal
from attendance_tracker.models.user import User, UserRole

logger = logging.getLogger("seed")


def ensure_admin(db) -> User:
    """Create the configured admin unless a user with that email exists."""
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        raise ValueError("ADMIN_EMAIL and ADMIN_PASSWORD must be set")

    admin = db.query(User).filter(User.email == settings.ADMIN_EMAIL).first()
    if admin:
        logger.info(f"Admin user {admin.email} already exists")
        return admin

    admin = User(
        name=settings.ADMIN_NAME,
        email=settings.ADMIN_EMAIL,
        phone=settings.ADMIN_PHONE,
        password_hash=get_password_hash(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        position=settings.ADMIN_POSITION,
        start_date=settings.ADMIN_START_DATE or get_now().date(),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Created admin user {admin.email}")
    return admin


def seed_database() -> int:
    db = SessionLocal()
    try:
        ensure_admin(db)
    except Exception as e:
        logger.error(f"Error seeding database: {e}")
        db.rollback()
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(seed_database())
