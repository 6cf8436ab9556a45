"""Seed default admin user if not present."""
import logging

from app.api.deps import get_password_hash
from app.config import settings
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


async def seed_admin():
    email = settings.admin_email.lower()
    existing = await User.find_one(User.email == email)
    if existing:
        return
    await User(
        email=email,
        hashed_password=get_password_hash(settings.admin_password),
        role=UserRole.ADMIN,
        name=settings.admin_full_name,
    ).insert()
    logger.info("Seeded admin user %s", email)
