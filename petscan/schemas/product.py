"""Pydantic schemas for product lookups and allergy checks."""

from __future__ import annotations

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

ProductSource = Literal["go-upc", "openpetfoodfacts", "openfoodfacts", "none"]


class NormalizedProduct(BaseModel):
    """
    A product as returned by any upstream provider, reduced to the fields
    the UI shows. ingredients_text may be missing or non-English.
    """

    barcode: str
    name: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None
    ingredients_text: Optional[str] = None
    source: ProductSource


class AllergenHit(BaseModel):
    """A single allergen match, rendered as a chip and used for highlighting."""

    model_config = ConfigDict(from_attributes=True)

    allergen: str                      # user's term as entered
    matched: str                       # normalized string found in the text
    kind: Literal["phrase", "token"]


class CheckRequest(BaseModel):
    """Body for POST /api/check. allergens=None means use the stored profile."""

    ingredients_text: Optional[str] = None
    allergens: Optional[list[str]] = None


class CheckResponse(BaseModel):
    """Verdict plus everything the UI needs to explain it."""

    verdict: Literal["safe", "avoid", "unknown"]
    hits: list[AllergenHit] = Field(default_factory=list)
    highlight_terms: list[str] = Field(default_factory=list)


class ProductCheckResponse(CheckResponse):
    """Response for GET /api/check/{barcode}."""

    product: NormalizedProduct
