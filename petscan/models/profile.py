"""Profile ORM model — the pet's name and allergen list."""

from sqlalchemy import Column, Integer, Text, JSON, TIMESTAMP, func

from petscan.database import Base

# The app keeps exactly one profile; this is its primary key.
SINGLETON_PROFILE_ID = 1


class Profile(Base):
    """
    Stored pet profile. allergens holds the user's terms exactly as entered
    (already deduplicated by normalized form on write).
    """

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    pet_name = Column(Text, nullable=False)
    allergens = Column(JSON, nullable=False, default=list)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
