"""Shopping lookup agent backed by search-grounded Gemini calls."""

from __future__ import annotations

import logging

from campus_app.errors import ShoppingLookupError
from campus_app.logging_config import get_logger, log_event, operation_context
from logic.shopping_results import shopping_search_url, suggestions_from_citations
from models.plan import OutfitItem
from models.shopping import ShoppingLookupResult
from tools.model_client import ModelClient

LOGGER = get_logger(__name__)

SHOPPING_PROMPT_TEMPLATE = (
    'Find 3 distinct, purchasable fashion items matching this description: "{query}". '
    "Return the product name, an approximate price, and the merchant name. "
    "If specific links aren't found, find the best search queries."
)


def build_shopping_prompt(query: str) -> str:
    return SHOPPING_PROMPT_TEMPLATE.format(query=query)


class ShoppingLookupAgent:
    """Finds purchase links for a free-text item description."""

    def __init__(self, client: ModelClient) -> None:
        self.client = client

    def find_suggestions(self, query: str) -> ShoppingLookupResult:
        """Issue one grounded search and shape the citations into suggestions.

        Raises:
            ShoppingLookupError: the query is blank or the remote call failed
                for any reason.
                Nothing is retried.
        """

        cleaned = " ".join((query or "").split())
        if not cleaned:
            raise ShoppingLookupError("Nothing to search for.")

        with operation_context("agent:shopping.find_suggestions") as correlation_id:
            try:
                reply = self.client.search(build_shopping_prompt(cleaned))
            except Exception as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="shopping_lookup_failed",
                    agent="shopping",
                    correlation_id=correlation_id,
                    details=str(exc),
                )
                raise ShoppingLookupError() from exc

            suggestions = suggestions_from_citations(cleaned, reply.citations)
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="shopping",
                method="find_suggestions",
                correlation_id=correlation_id,
                citation_count=len(reply.citations),
                suggestion_count=len(suggestions),
            )
            return ShoppingLookupResult(
                query=cleaned,
                suggestions=suggestions,
                view_more_url=shopping_search_url(cleaned),
            )

    def find_for_item(self, item: OutfitItem) -> ShoppingLookupResult:
        return self.find_suggestions(item.shopping_query())


__all__ = ["SHOPPING_PROMPT_TEMPLATE", "ShoppingLookupAgent", "build_shopping_prompt"]
