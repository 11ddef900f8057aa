"""
Allergen matcher — pure text matching between ingredient listings and the
user's allergen terms.

Everything here is total and side-effect free: degenerate input yields an
empty result, never an exception. All comparisons go through normalize().
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from petscan.utils.allergy_data import (
    ALLERGEN_SYNONYMS,
    HIT_KIND_PHRASE,
    HIT_KIND_TOKEN,
    MIN_SUBSTRING_MATCH_LENGTH,
)

_PARENS_RE = re.compile(r"[()]")
_DISALLOWED_RE = re.compile(r"[^a-z0-9\s/-]")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Hit:
    """One successful match: the user's term as entered, what matched, and how."""

    allergen: str
    matched: str
    kind: str


def normalize(text: Optional[str]) -> str:
    """Lowercase, blank out everything but [a-z0-9 /-], collapse whitespace."""
    s = (text or "").lower()
    s = _PARENS_RE.sub(" ", s)
    s = _DISALLOWED_RE.sub(" ", s)
    # \s also matches non-space whitespace (tabs, newlines) left by the step above
    s = _WHITESPACE_RE.sub(" ", s)
    return s.strip()


def dedupe_allergens(allergens: Iterable[str]) -> list[str]:
    """Drop empty and repeated terms (by normalized form), keeping first spellings."""
    out: list[str] = []
    seen: set[str] = set()
    for raw in allergens:
        n = normalize(raw)
        if not n or n in seen:
            continue
        seen.add(n)
        out.append(raw.strip())
    return out


def expand_allergen(raw: str) -> set[str]:
    """
    Return the normalized term plus its synonyms.

    Multi-word terms are exact phrases and are never expanded.
    An empty term expands to an empty set.
    """
    term = normalize(raw)
    if not term:
        return set()
    candidates = {term}
    if " " not in term:
        candidates.update(normalize(s) for s in ALLERGEN_SYNONYMS.get(term, ()))
        candidates.discard("")
    return candidates


def tokenize(text: str) -> list[str]:
    return [t for t in text.split() if t]


# ── Match rules ──────────────────────────────────────────────────────────────

def _phrase_match(candidate: str, text: str, tokens: set[str]) -> bool:
    return " " in candidate and candidate in text


def _token_match(candidate: str, text: str, tokens: set[str]) -> bool:
    return " " not in candidate and candidate in tokens


def _substring_match(candidate: str, text: str, tokens: set[str]) -> bool:
    return (
        " " not in candidate
        and len(candidate) >= MIN_SUBSTRING_MATCH_LENGTH
        and candidate in text
    )


# Evaluated in order; the first rule that succeeds decides the hit kind.
_MATCH_RULES: tuple[tuple[Callable[[str, str, set[str]], bool], str], ...] = (
    (_phrase_match, HIT_KIND_PHRASE),
    (_token_match, HIT_KIND_TOKEN),
    (_substring_match, HIT_KIND_PHRASE),
)


def _match_kind(candidate: str, text: str, tokens: set[str]) -> Optional[str]:
    for rule, kind in _MATCH_RULES:
        if rule(candidate, text, tokens):
            return kind
    return None


def _hit_sort_key(hit: Hit) -> tuple[int, int]:
    """Phrase hits first, then longer matched strings first."""
    return (0 if hit.kind == HIT_KIND_PHRASE else 1, -len(hit.matched))


def find_allergen_hits(
    ingredients_text: Optional[str],
    allergens: Iterable[str],
) -> list[Hit]:
    """
    Match every allergen term (and its synonyms) against the ingredient text.

    At most one hit per (normalized term, candidate) pair. The returned list
    is sorted phrase-before-token, then longest match first; the sort is
    stable so ties keep allergen input order.
    """
    text = normalize(ingredients_text)
    if not text:
        return []
    tokens = set(tokenize(text))

    hits: list[Hit] = []
    seen: set[tuple[str, str]] = set()

    for raw in allergens:
        term = normalize(raw)
        if not term:
            continue
        # Sorted so ties between synonyms of one term come out deterministic
        for candidate in sorted(expand_allergen(raw)):
            key = (term, candidate)
            if key in seen:
                continue
            kind = _match_kind(candidate, text, tokens)
            if kind is None:
                continue
            seen.add(key)
            hits.append(Hit(allergen=raw, matched=candidate, kind=kind))

    hits.sort(key=_hit_sort_key)
    return hits


def get_highlight_terms(hits: Iterable[Hit]) -> list[str]:
    """Distinct matched strings, longest first, for inline highlighting."""
    distinct = list(dict.fromkeys(h.matched for h in hits))
    distinct.sort(key=len, reverse=True)
    return distinct
