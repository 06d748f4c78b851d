"""URL slugs derived from display names."""

import re
import unicodedata

_NON_WORD = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """Lowercase ASCII slug: accents folded, punctuation dropped, words joined by '-'.

    >>> slugify("Películas de Acción!")
    'peliculas-de-accion'
    """
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    normalized = _NON_WORD.sub("", normalized.lower())
    return _SEPARATORS.sub("-", normalized).strip("-")
