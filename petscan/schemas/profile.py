"""Pydantic schemas for the profile endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProfileRead(BaseModel):
    """Stored profile returned by GET /profile."""

    model_config = ConfigDict(from_attributes=True)

    pet_name: str
    allergens: list[str] = Field(default_factory=list)


class ProfileUpdate(BaseModel):
    """
    Body for PUT /profile.
    This is a FULL REPLACE of the profile — not a merge.
    """

    pet_name: str = ""
    allergens: list[str] = Field(default_factory=list)
