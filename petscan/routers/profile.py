"""Profile endpoints — the pet's name and allergen list."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from petscan.database import get_db
from petscan.schemas.profile import ProfileRead, ProfileUpdate
from petscan.services.profile_store import load_profile, save_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileRead)
async def get_profile(db: AsyncSession = Depends(get_db)) -> ProfileRead:
    """Return the stored profile, or the default one if nothing is stored yet."""
    return await load_profile(db)


@router.put("", response_model=ProfileRead)
async def put_profile(
    body: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
) -> ProfileRead:
    """
    FULL REPLACE of the profile.
    Allergens are deduplicated by normalized form; blank entries are dropped.
    """
    try:
        return await save_profile(db, body)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save profile",
        ) from exc
