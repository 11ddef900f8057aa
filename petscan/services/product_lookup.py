"""
Product lookup — resolves a barcode through a chain of upstream providers.

Providers are tried in order:

  go-upc            → commercial UPC database (only when GO_UPC_API_KEY is set)
  openpetfoodfacts  → Open Pet Food Facts
  openfoodfacts     → Open Food Facts

The first result carrying ingredient text wins. If no provider has
ingredients, the first provider that knows the product at all is returned
so the UI can still show name/brand/image with an "unknown" verdict.

Results are cached in-process (cachetools TTLCache) keyed by barcode.
Lookups where a provider was unreachable are not cached, so a transient
upstream failure does not pin a degraded answer.
"""

from __future__ import annotations

import logging
import re
from typing import Any, AsyncIterator, Awaitable, Callable, Optional
from urllib.parse import quote

import httpx
from cachetools import TTLCache

from petscan.config import settings
from petscan.schemas.product import NormalizedProduct

logger = logging.getLogger(__name__)

_NON_DIGIT_RE = re.compile(r"\D")
_MISSING = object()

# Key  : cleaned barcode
# Value: NormalizedProduct | None (None = no provider knows it)
_cache_lookup: TTLCache = TTLCache(
    maxsize=settings.lookup_cache_maxsize,
    ttl=settings.lookup_cache_ttl_seconds,
)


class ProviderError(Exception):
    """An upstream provider could not be reached or returned garbage."""


def clean_barcode(raw: Optional[str]) -> str:
    """Strip everything that is not a digit."""
    return _NON_DIGIT_RE.sub("", raw or "").strip()


def clear_lookup_cache() -> None:
    _cache_lookup.clear()


async def _get_product_json(
    client: httpx.AsyncClient,
    url: str,
    headers: Optional[dict[str, str]] = None,
) -> Optional[dict[str, Any]]:
    """
    GET url and return body["product"], or None when the provider answers
    but does not know the product. Raises ProviderError on transport errors.
    """
    try:
        resp = await client.get(url, headers=headers)
    except httpx.HTTPError as exc:
        raise ProviderError(f"{url}: {exc}") from exc

    if not resp.is_success:
        logger.debug("Provider returned %s for %s", resp.status_code, url)
        return None

    try:
        data = resp.json()
    except ValueError as exc:
        raise ProviderError(f"{url}: invalid JSON") from exc

    product = data.get("product") if isinstance(data, dict) else None
    if not isinstance(product, dict) or not product:
        return None
    return product


# ── Providers ────────────────────────────────────────────────────────────────

async def fetch_go_upc(
    client: httpx.AsyncClient, barcode: str
) -> Optional[NormalizedProduct]:
    key = settings.go_upc_api_key
    if not key:
        return None

    url = f"{settings.go_upc_base_url}/code/{quote(barcode)}"
    p = await _get_product_json(client, url, {"Authorization": f"Bearer {key}"})
    if not p:
        return None

    ingredients = p.get("ingredients") or {}
    return NormalizedProduct(
        barcode=barcode,
        name=p.get("name"),
        brand=p.get("brand"),
        image_url=p.get("imageUrl"),
        ingredients_text=ingredients.get("text") if isinstance(ingredients, dict) else None,
        source="go-upc",
    )


def _from_open_facts(p: dict[str, Any], barcode: str, source: str) -> NormalizedProduct:
    """Open Pet Food Facts and Open Food Facts share one product schema."""
    return NormalizedProduct(
        barcode=barcode,
        name=p.get("product_name"),
        brand=p.get("brands"),
        image_url=p.get("image_url"),
        ingredients_text=p.get("ingredients_text") or p.get("ingredients_text_en"),
        source=source,
    )


async def fetch_open_pet_food_facts(
    client: httpx.AsyncClient, barcode: str
) -> Optional[NormalizedProduct]:
    url = f"{settings.open_pet_food_facts_base_url}/api/v0/product/{quote(barcode)}.json"
    p = await _get_product_json(client, url)
    return _from_open_facts(p, barcode, "openpetfoodfacts") if p else None


async def fetch_open_food_facts(
    client: httpx.AsyncClient, barcode: str
) -> Optional[NormalizedProduct]:
    url = f"{settings.open_food_facts_base_url}/api/v0/product/{quote(barcode)}.json"
    p = await _get_product_json(client, url)
    return _from_open_facts(p, barcode, "openfoodfacts") if p else None


Provider = Callable[[httpx.AsyncClient, str], Awaitable[Optional[NormalizedProduct]]]

PROVIDERS: tuple[Provider, ...] = (
    fetch_go_upc,
    fetch_open_pet_food_facts,
    fetch_open_food_facts,
)


# ── Public API ───────────────────────────────────────────────────────────────

def build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.lookup_timeout_seconds,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


async def _run_chain(
    client: httpx.AsyncClient, barcode: str
) -> tuple[Optional[NormalizedProduct], bool]:
    """Return (best result, degraded). degraded=True if any provider errored."""
    found: list[NormalizedProduct] = []
    degraded = False

    for provider in PROVIDERS:
        try:
            product = await provider(client, barcode)
        except ProviderError as exc:
            logger.warning("Provider %s failed for %s: %s", provider.__name__, barcode, exc)
            degraded = True
            continue
        if product is None:
            continue
        if product.ingredients_text:
            return product, degraded
        found.append(product)

    return (found[0] if found else None), degraded


async def lookup_product(
    barcode: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[NormalizedProduct]:
    """
    Resolve a cleaned barcode to a product, or None if no provider knows it.
    Pass client to reuse a connection pool (or to inject a mock transport).
    """
    cached = _cache_lookup.get(barcode, _MISSING)
    if cached is not _MISSING:
        logger.debug("Lookup cache hit for %s", barcode)
        return cached

    if client is None:
        async with build_client() as own_client:
            product, degraded = await _run_chain(own_client, barcode)
    else:
        product, degraded = await _run_chain(client, barcode)

    if not degraded:
        _cache_lookup[barcode] = product

    logger.info(
        "Lookup %s → %s",
        barcode,
        product.source if product else "none",
    )
    return product


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency: yields an upstream HTTP client for one request."""
    async with build_client() as client:
        yield client
