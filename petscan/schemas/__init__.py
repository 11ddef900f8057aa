"""Pydantic schemas package."""

from petscan.schemas.product import (
    AllergenHit,
    CheckRequest,
    CheckResponse,
    NormalizedProduct,
    ProductCheckResponse,
)
from petscan.schemas.profile import ProfileRead, ProfileUpdate

__all__ = [
    "AllergenHit", "CheckRequest", "CheckResponse",
    "NormalizedProduct", "ProductCheckResponse",
    "ProfileRead", "ProfileUpdate",
]
