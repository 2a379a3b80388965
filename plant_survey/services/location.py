"""Multilingual text and location normalization.

Partner addresses and survey answers may spell the same place differently
("São Paulo", "Sao Paulo", "SP"). These helpers fold case and accents and
expand known aliases so such spellings compare equal.
"""

import unicodedata
from typing import Dict, FrozenSet, List, Optional

# Canonical key -> known spellings and abbreviations
LOCATION_ALIASES: Dict[str, List[str]] = {
    # Brazilian cities
    "belo_horizonte": ["belo horizonte", "bh"],
    "brasilia": ["brasília", "brasilia", "df"],
    "salvador": ["salvador", "ssa"],
    "fortaleza": ["fortaleza", "for"],
    "manaus": ["manaus", "mao"],
    "curitiba": ["curitiba", "cwb"],
    "recife": ["recife", "rec"],
    "porto_alegre": ["porto alegre", "poa"],
    # Brazilian states
    "sao_paulo": ["são paulo", "sao paulo", "sp"],
    "rio_de_janeiro": ["rio de janeiro", "rj"],
    "minas_gerais": ["minas gerais", "mg"],
    "bahia": ["bahia", "ba"],
    "parana": ["paraná", "parana", "pr"],
    "rio_grande_do_sul": ["rio grande do sul", "rs"],
    "santa_catarina": ["santa catarina", "sc"],
    "goias": ["goiás", "goias", "go"],
    "ceara": ["ceará", "ceara", "ce"],
    "pernambuco": ["pernambuco", "pe"],
    # Portuguese cities
    "lisboa": ["lisboa", "lisbon"],
    "porto": ["porto", "oporto"],
    "braga": ["braga"],
    "coimbra": ["coimbra"],
    "funchal": ["funchal"],
}


def normalize_text(text: str) -> str:
    """Lowercase, strip accents and collapse whitespace.

    Example:
        >>> normalize_text("  São   Paulo ")
        'sao paulo'
    """
    decomposed = unicodedata.normalize("NFD", text.strip().lower())
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(without_marks.split())


def location_variations(location: str) -> FrozenSet[str]:
    """Return every normalized spelling known for ``location``."""
    normalized = normalize_text(location)
    variations = {normalized}

    for key, aliases in LOCATION_ALIASES.items():
        key_form = normalize_text(key.replace("_", " "))
        alias_forms = {normalize_text(alias) for alias in aliases}
        if normalized == key_form or normalized in alias_forms:
            variations.add(key_form)
            variations.update(alias_forms)
            break

    return frozenset(variations)


def same_location(left: Optional[str], right: Optional[str]) -> bool:
    """Check whether two place names refer to the same location."""
    if not left or not right:
        return False
    return normalize_text(right) in location_variations(left)


def loosely_equal(left: str, right: str) -> bool:
    """Accent- and case-insensitive equality."""
    return normalize_text(left) == normalize_text(right)
