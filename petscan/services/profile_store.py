"""
Profile store — load/save the single pet profile.

Reads never fail on an empty database: a missing row yields the default
profile. Writes are a full replace.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from petscan.config import settings
from petscan.models import SINGLETON_PROFILE_ID, Profile
from petscan.schemas.profile import ProfileRead, ProfileUpdate
from petscan.services.allergen_matcher import dedupe_allergens

logger = logging.getLogger(__name__)


def default_profile() -> ProfileRead:
    return ProfileRead(
        pet_name=settings.default_pet_name,
        allergens=dedupe_allergens(settings.default_allergens),
    )


async def load_profile(db: AsyncSession) -> ProfileRead:
    """Return the stored profile, or the seeded default when none is stored."""
    row = await db.get(Profile, SINGLETON_PROFILE_ID)
    if row is None:
        return default_profile()
    return ProfileRead(
        pet_name=row.pet_name or settings.default_pet_name,
        allergens=[a for a in (row.allergens or []) if isinstance(a, str) and a],
    )


async def save_profile(db: AsyncSession, body: ProfileUpdate) -> ProfileRead:
    """Replace the stored profile. Allergens are deduplicated by normalized form."""
    pet_name = body.pet_name.strip() or settings.default_pet_name
    allergens = dedupe_allergens(body.allergens)

    row = await db.get(Profile, SINGLETON_PROFILE_ID)
    try:
        if row is None:
            row = Profile(id=SINGLETON_PROFILE_ID, pet_name=pet_name, allergens=allergens)
            db.add(row)
        else:
            row.pet_name = pet_name
            row.allergens = allergens
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error("Failed to save profile")
        raise

    logger.info("Saved profile %r with %d allergen(s)", pet_name, len(allergens))
    return ProfileRead(pet_name=pet_name, allergens=allergens)
