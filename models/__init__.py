"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.preferences import PhotoAttachment, Preferences
from models.plan import DailyPlan, OutfitItem, WeeklyPlan
from models.shopping import SearchReply, ShoppingLookupResult, ShoppingSuggestion, WebCitation

__all__ = [
    "PhotoAttachment",
    "Preferences",
    "DailyPlan",
    "OutfitItem",
    "WeeklyPlan",
    "SearchReply",
    "ShoppingLookupResult",
    "ShoppingSuggestion",
    "WebCitation",
]
