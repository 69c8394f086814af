"""Shopping suggestion schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ShoppingSuggestion(BaseModel):
    """A purchase candidate shown for one outfit item."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    source: str
    price: Optional[str] = None
    thumbnail: Optional[str] = None


class ShoppingLookupResult(BaseModel):
    """Suggestions for one query plus the always-available search link."""

    model_config = ConfigDict(frozen=True)

    query: str
    suggestions: List[ShoppingSuggestion]
    view_more_url: str


@dataclass
class WebCitation:
    """An attributed web source returned alongside a search-grounded reply."""

    title: Optional[str]
    uri: Optional[str]


@dataclass
class SearchReply:
    """Text and citations from one search-grounded model call."""

    text: Optional[str]
    citations: List[WebCitation] = field(default_factory=list)


__all__ = ["ShoppingSuggestion", "ShoppingLookupResult", "WebCitation", "SearchReply"]
