import re
import unicodedata
from functools import lru_cache

# Words that don't help tell corridor stations apart
GENERIC_TOKENS = frozenset({"estacion", "geltokia", "apeadero", "station", "renfe", "de"})

# Basque and Spanish spellings used interchangeably for the same place
ALIASES: dict[str, str] = {
    "donostia": "san sebastian",
    "errenteria": "renteria",
    "pasajes": "pasaia",
    "brinkola": "brincola",
    "loyola": "loiola",
    "ormaiztegui": "ormaiztegi",
    "ordicia": "ordizia",
}


@lru_cache(maxsize=1024)
def remove_accents(text: str) -> str:
    """Remove accents from text.

    Example: "Bríncola" -> "Brincola"
    """
    # Normalize to NFD (decomposes accented characters)
    normalized = unicodedata.normalize("NFD", text)
    # Remove combining diacritical marks
    return "".join(c for c in normalized if unicodedata.category(c) != "Mn")


@lru_cache(maxsize=1024)
def normalize_text(text: str) -> str:
    """Normalize a station name or query for fuzzy matching.

    - Converts to lowercase
    - Removes accents
    - Maps Basque/Spanish alternative names to the spelling used in the table
    - Treats hyphens as spaces and normalizes whitespace

    Example: "Donostia" -> "san sebastian"
    Example: "  Lezo-Rentería " -> "lezo renteria"
    """
    result = remove_accents(text.lower().strip())

    tokens = re.split(r"(\W+)", result)
    result = "".join(ALIASES.get(token, token) for token in tokens)

    return " ".join(result.replace("-", " ").split())


def get_meaningful_tokens(text: str) -> set[str]:
    """Extract tokens from normalized text, excluding generic words.

    Example: "Estación de Hernani-Centro" -> {"hernani", "centro"}
    """
    normalized = normalize_text(text)
    raw_tokens = re.split(r"[\s/\-]+", normalized)
    return {t for t in raw_tokens if t and len(t) > 1 and t not in GENERIC_TOKENS}
