"""
AllergyGuard — verdict layer on top of the allergen matcher.

Turns a product's ingredient text and the pet's allergen list into a
safe / avoid / unknown verdict plus the hits and highlight terms the UI
renders. The matcher itself never decides "unknown"; that policy lives here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from petscan.services.allergen_matcher import (
    Hit,
    dedupe_allergens,
    find_allergen_hits,
    get_highlight_terms,
    normalize,
)
from petscan.utils.allergy_data import (
    ENGLISH_TEXT_PATTERN,
    VERDICT_AVOID,
    VERDICT_SAFE,
    VERDICT_UNKNOWN,
)

logger = logging.getLogger(__name__)

_ENGLISH_TEXT_RE = re.compile(ENGLISH_TEXT_PATTERN)


def looks_english(text: Optional[str]) -> bool:
    """True when the raw text is plain ASCII the matcher can read in full."""
    return bool(text) and _ENGLISH_TEXT_RE.match(text) is not None


@dataclass
class AllergyCheckResult:
    """
    Result of running AllergyGuard.check().
    hits is sorted phrase-first then longest-first; highlight_terms longest-first.
    """

    verdict: str = VERDICT_UNKNOWN
    hits: list[Hit] = field(default_factory=list)
    highlight_terms: list[str] = field(default_factory=list)


class AllergyGuard:
    """
    Core rules:
    1. No usable ingredient text, or text that is not plain English
       (accented or non-Latin listings) → 'unknown'. Hits are still
       reported so the UI can highlight what it did recognise.
    2. Any hit → 'avoid'.
    3. Otherwise → 'safe' (including an empty allergen list).
    """

    def check(
        self,
        ingredients_text: Optional[str],
        allergens: Iterable[str],
    ) -> AllergyCheckResult:
        if not normalize(ingredients_text):
            return AllergyCheckResult(verdict=VERDICT_UNKNOWN)

        terms = dedupe_allergens(allergens)
        hits = find_allergen_hits(ingredients_text, terms)
        if not looks_english(ingredients_text):
            verdict = VERDICT_UNKNOWN
        elif hits:
            verdict = VERDICT_AVOID
        else:
            verdict = VERDICT_SAFE

        if hits:
            logger.debug(
                "Allergen hits: %s",
                ", ".join(f"{h.allergen}->{h.matched}" for h in hits),
            )

        return AllergyCheckResult(
            verdict=verdict,
            hits=hits,
            highlight_terms=get_highlight_terms(hits),
        )
