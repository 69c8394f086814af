"""CampusStyle app bootstrap."""

from __future__ import annotations

import logging
from typing import Any, Dict

from campus_app.config import AppConfig
from campus_app.errors import (
    PLAN_GENERATION_FAILED,
    SHOPPING_LOOKUP_FAILED,
    ItemNotFoundError,
    NoPlanError,
    PlanGenerationError,
    ShoppingLookupError,
)
from campus_app.logging_config import configure_logging, get_logger, log_event, operation_context
from agents.plan_generator import PlanGeneratorAgent
from agents.shopping_agent import ShoppingLookupAgent
from logic import plan_editor
from memory.plan_session import PlanSessionStore
from models.plan import WeeklyPlan
from models.preferences import Preferences
from models.shopping import ShoppingLookupResult
from tools.model_client import GeminiClient, ModelClient


LOGGER = get_logger(__name__)


class CampusStyleApp:
    """Wires together configuration, the Gemini client, agents and session state."""

    def __init__(
        self,
        config: AppConfig | None = None,
        client: ModelClient | None = None,
        sessions: PlanSessionStore | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging(self.config.log_level)

        self.client = client or GeminiClient.from_config(self.config)
        self.sessions = sessions or PlanSessionStore()
        self.plan_generator = PlanGeneratorAgent(config=self.config, client=self.client)
        self.shopping_agent = ShoppingLookupAgent(client=self.client)

    def start_session(self) -> str:
        """Create an empty plan session and return its identifier."""

        session_id = self.sessions.create_session()
        log_event(LOGGER, logging.INFO, "session_started", session_id=session_id)
        return session_id

    def session_state(self, session_id: str) -> Dict[str, Any]:
        return self.sessions.snapshot(session_id)

    def generate_plan(self, session_id: str, preferences: Preferences) -> WeeklyPlan:
        """Generate a plan and make it the session's current plan.

        On failure the error message is recorded on the session, the previous
        plan is left as it was and :class:`PlanGenerationError` propagates.
        """

        with operation_context("app:generate_plan", session_id=session_id):
            self.sessions.begin_generation(session_id)
            try:
                plan = self.plan_generator.generate_plan(preferences, session_id=session_id)
            except PlanGenerationError as exc:
                self.sessions.fail_generation(session_id, exc.message)
                raise
            except Exception as exc:
                self.sessions.fail_generation(session_id, PLAN_GENERATION_FAILED)
                raise PlanGenerationError() from exc
            self.sessions.complete_generation(session_id, plan)
            return plan

    def add_item(self, session_id: str, day_index: int, name: str) -> WeeklyPlan:
        plan = self.sessions.update_plan(
            session_id, lambda current: plan_editor.add_item(current, day_index, name)
        )
        log_event(LOGGER, logging.INFO, "plan_item_added", session_id=session_id, day_index=day_index)
        return plan

    def remove_item(self, session_id: str, day_index: int, item_id: str) -> WeeklyPlan:
        plan = self.sessions.update_plan(
            session_id, lambda current: plan_editor.remove_item(current, day_index, item_id)
        )
        log_event(LOGGER, logging.INFO, "plan_item_removed", session_id=session_id, day_index=day_index)
        return plan

    def reset_plan(self, session_id: str) -> None:
        self.sessions.reset(session_id)

    def dismiss_error(self, session_id: str) -> None:
        self.sessions.dismiss_error(session_id)

    def find_shopping(self, query: str) -> ShoppingLookupResult:
        """Stateless shopping lookup for a free-text query."""

        return self.shopping_agent.find_suggestions(query)

    def shop_item(self, session_id: str, day_index: int, item_id: str) -> Dict[str, Any]:
        """Open the session's lookup surface for one plan item and run the search.

        Returns ``{"status": "ok", "result": ...}`` when the result was shown,
        or ``{"status": "discarded"}`` when the surface was closed or replaced
        by a newer lookup while the search was in flight.
        """

        plan = self.sessions.current_plan(session_id)
        if plan is None:
            raise NoPlanError("Generate a plan before shopping for items")
        day = plan_editor.day_at(plan, day_index)
        item = day.find_item(item_id)
        if item is None:
            raise ItemNotFoundError(f"No item {item_id!r} on day {day_index}")

        query = item.shopping_query()
        token = self.sessions.open_lookup(session_id, query)
        try:
            result = self.shopping_agent.find_for_item(item)
        except ShoppingLookupError as exc:
            shown = self.sessions.fail_lookup(session_id, token, exc.message or SHOPPING_LOOKUP_FAILED)
            if not shown:
                return {"status": "discarded", "query": query}
            raise
        except Exception as exc:
            shown = self.sessions.fail_lookup(session_id, token, SHOPPING_LOOKUP_FAILED)
            if not shown:
                return {"status": "discarded", "query": query}
            raise ShoppingLookupError() from exc

        if not self.sessions.deliver_lookup(session_id, token, result):
            log_event(LOGGER, logging.INFO, "shopping_result_discarded", session_id=session_id)
            return {"status": "discarded", "query": query}
        return {"status": "ok", "query": query, "result": result}

    def close_lookup(self, session_id: str) -> None:
        self.sessions.close_lookup(session_id)


__all__ = ["CampusStyleApp"]
