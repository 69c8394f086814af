"""Turn search citations into a bounded list of shopping suggestions."""

from __future__ import annotations

from typing import Iterable, List
from urllib.parse import quote

from models.shopping import ShoppingSuggestion, WebCitation

SHOPPING_SEARCH_BASE_URL = "https://www.google.com/search"
MAX_SUGGESTIONS = 4

CITATION_SOURCE = "Google Search"
CITATION_PRICE = "Check Link"
CITATION_DEFAULT_TITLE = "Product Result"
FALLBACK_SOURCE = "Google Shopping"
FALLBACK_PRICE = "View Prices"

# Matches what encodeURIComponent leaves unescaped.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def shopping_search_url(query: str) -> str:
    """Deterministic Google Shopping search link for ``query``."""

    return f"{SHOPPING_SEARCH_BASE_URL}?tbm=shop&q={quote(query, safe=_URI_COMPONENT_SAFE)}"


def fallback_suggestion(query: str) -> ShoppingSuggestion:
    return ShoppingSuggestion(
        title=f'Search for "{query}"',
        link=shopping_search_url(query),
        source=FALLBACK_SOURCE,
        price=FALLBACK_PRICE,
    )


def dedupe_by_link(suggestions: Iterable[ShoppingSuggestion]) -> List[ShoppingSuggestion]:
    seen: set[str] = set()
    unique: List[ShoppingSuggestion] = []
    for suggestion in suggestions:
        if suggestion.link in seen:
            continue
        seen.add(suggestion.link)
        unique.append(suggestion)
    return unique


def suggestions_from_citations(query: str, citations: Iterable[WebCitation]) -> List[ShoppingSuggestion]:
    """Map citations to suggestions, falling back to a search link when none are usable.

    Prices in free-form model text are not trusted, so every citation gets the
    "Check Link" placeholder. Citations without a URI are skipped.
    """

    suggestions = [
        ShoppingSuggestion(
            title=(citation.title or "").strip() or CITATION_DEFAULT_TITLE,
            link=citation.uri.strip(),
            source=CITATION_SOURCE,
            price=CITATION_PRICE,
        )
        for citation in citations
        if citation.uri and citation.uri.strip()
    ]
    if not suggestions:
        suggestions = [fallback_suggestion(query)]
    return dedupe_by_link(suggestions)[:MAX_SUGGESTIONS]


__all__ = [
    "MAX_SUGGESTIONS",
    "SHOPPING_SEARCH_BASE_URL",
    "dedupe_by_link",
    "fallback_suggestion",
    "shopping_search_url",
    "suggestions_from_citations",
]
