"""SQLAlchemy ORM models package."""

from petscan.database import Base
from petscan.models.profile import Profile, SINGLETON_PROFILE_ID

__all__ = ["Base", "Profile", "SINGLETON_PROFILE_ID"]
