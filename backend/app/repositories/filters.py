"""Text-search helpers shared by the repositories"""

import re
from typing import List

# Escape character passed to ``ilike(..., escape=LIKE_ESCAPE)``
LIKE_ESCAPE = "\\"

_LIKE_SPECIALS = re.compile(r"([\\%_])")


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so ``text`` only matches literally"""
    return _LIKE_SPECIALS.sub(r"\\\1", text)


def contains_pattern(text: str) -> str:
    """Substring pattern for ``text``; use with ``escape=LIKE_ESCAPE``"""
    return f"%{escape_like(text)}%"


def search_terms(query: str) -> List[str]:
    """Distinct whitespace-separated words of a free-text query, in order"""
    terms = []
    for word in query.split():
        if word not in terms:
            terms.append(word)
    return terms
