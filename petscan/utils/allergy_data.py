"""
Static allergen data — single source of truth for all matching logic.
Both the matcher and the AllergyGuard import exclusively from here.
"""

from types import MappingProxyType

# Substring fallback only applies to single-token candidates at least this long.
# Shorter ones ("pea", "egg", "oat") collide with unrelated words.
MIN_SUBSTRING_MATCH_LENGTH = 5

HIT_KIND_PHRASE = "phrase"
HIT_KIND_TOKEN = "token"

VERDICT_SAFE = "safe"
VERDICT_AVOID = "avoid"
VERDICT_UNKNOWN = "unknown"

# Normalized single-word allergen → normalized alternative forms.
# Multi-word user terms are never looked up here.
ALLERGEN_SYNONYMS: MappingProxyType = MappingProxyType({
    "dairy":   frozenset({"milk", "lactose", "whey", "casein"}),
    "milk":    frozenset({"lactose", "whey", "casein"}),
    "chicken": frozenset({"poultry", "chicken meal", "chicken fat"}),
    "poultry": frozenset({"chicken", "turkey", "duck"}),
    "beef":    frozenset({"bovine", "beef meal", "beef fat"}),
    "egg":     frozenset({"eggs", "egg product", "albumen"}),
    "eggs":    frozenset({"egg", "egg product", "albumen"}),
    "wheat":   frozenset({"gluten", "wheat flour", "wheat gluten"}),
    "gluten":  frozenset({"wheat", "barley", "rye"}),
    "soy":     frozenset({"soya", "soybean", "soybean meal"}),
    "soya":    frozenset({"soy", "soybean"}),
    "fish":    frozenset({"salmon", "whitefish", "fish meal", "menhaden"}),
    "corn":    frozenset({"maize", "corn gluten meal"}),
    "lamb":    frozenset({"lamb meal", "mutton"}),
    "pork":    frozenset({"pig", "porcine", "bacon"}),
})

# Ingredient text the matcher can be trusted on: plain ASCII and label
# punctuation only. Anything else (accented or non-Latin listings) would
# lose words in normalization, so the verdict is 'unknown' instead.
ENGLISH_TEXT_PATTERN = r"^[\x00-\x7F\s.,()%\-:;'\"/]+$"
