"""
Product endpoints — barcode lookup and allergy checks.

The verdict is always computed here, never by the client, so every product
shown in the UI carries the same safe/avoid/unknown policy.
"""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from petscan.database import get_db
from petscan.schemas.product import (
    AllergenHit,
    CheckRequest,
    CheckResponse,
    NormalizedProduct,
    ProductCheckResponse,
)
from petscan.services.allergy_guard import AllergyCheckResult, AllergyGuard
from petscan.services.product_lookup import clean_barcode, get_http_client, lookup_product
from petscan.services.profile_store import load_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["products"])

_allergy_guard = AllergyGuard()


def _to_response_fields(result: AllergyCheckResult) -> dict:
    return {
        "verdict": result.verdict,
        "hits": [AllergenHit.model_validate(h) for h in result.hits],
        "highlight_terms": result.highlight_terms,
    }


def _not_found(barcode: str) -> JSONResponse:
    return JSONResponse(
        content={"barcode": barcode, "source": "none"},
        status_code=status.HTTP_404_NOT_FOUND,
    )


@router.get("/lookup", response_model=NormalizedProduct)
async def lookup(
    barcode: str = Query(default=""),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Resolve a barcode through the provider chain.
    400 when the barcode has no digits, 404 when no provider knows it.
    """
    cleaned = clean_barcode(barcode)
    if not cleaned:
        return JSONResponse(
            content={"error": "Missing barcode"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    product = await lookup_product(cleaned, client)
    if product is None:
        return _not_found(cleaned)
    return product


@router.post("/check", response_model=CheckResponse)
async def check(
    body: CheckRequest,
    db: AsyncSession = Depends(get_db),
) -> CheckResponse:
    """Check raw ingredient text. Omitted allergens fall back to the stored profile."""
    allergens = body.allergens
    if allergens is None:
        allergens = (await load_profile(db)).allergens

    result = _allergy_guard.check(body.ingredients_text, allergens)
    return CheckResponse(**_to_response_fields(result))


@router.get("/check/{barcode}", response_model=ProductCheckResponse)
async def check_barcode(
    barcode: str,
    db: AsyncSession = Depends(get_db),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Look up a product and check it against the stored profile."""
    cleaned = clean_barcode(barcode)
    if not cleaned:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing barcode",
        )

    product = await lookup_product(cleaned, client)
    if product is None:
        return _not_found(cleaned)

    profile = await load_profile(db)
    result = _allergy_guard.check(product.ingredients_text, profile.allergens)
    logger.info("Check %s for %r → %s", cleaned, profile.pet_name, result.verdict)
    return ProductCheckResponse(product=product, **_to_response_fields(result))
