"""Plan generator agent: preferences in, validated weekly plan out."""

from __future__ import annotations

import logging

from campus_app.config import AppConfig
from campus_app.errors import PlanGenerationError, PlanParseError, RemoteModelError
from campus_app.logging_config import get_logger, log_event, operation_context
from logic.plan_request import build_plan_request
from logic.plan_validation import parse_weekly_plan
from models.plan import WeeklyPlan
from models.preferences import Preferences
from tools.model_client import ModelClient

LOGGER = get_logger(__name__)


class PlanGeneratorAgent:
    """Builds the Gemini request, sends it once and validates the reply.

    Remote failures, empty replies and schema violations all collapse into a
    single :class:`PlanGenerationError` carrying the user-facing message. The
    underlying cause stays chained for logs.
    """

    def __init__(self, config: AppConfig, client: ModelClient) -> None:
        self.config = config
        self.client = client

    def generate_plan(self, preferences: Preferences, session_id: str | None = None) -> WeeklyPlan:
        with operation_context("agent:planner.generate_plan", session_id=session_id) as correlation_id:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_started",
                agent="planner",
                method="generate_plan",
                correlation_id=correlation_id,
                session_id=session_id,
                model=self.config.model,
                college_days=[day.value for day in preferences.college_days],
                season=preferences.season.value,
                style=preferences.style.value,
                has_photo=preferences.photo is not None,
            )
            if preferences.hours_look_inverted:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="college_hours_inverted",
                    correlation_id=correlation_id,
                    start_time=preferences.start_time,
                    end_time=preferences.end_time,
                )

            request = build_plan_request(preferences)
            try:
                raw_text = self.client.generate_plan(request)
                plan = parse_weekly_plan(raw_text)
            except (RemoteModelError, PlanParseError) as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="plan_generation_failed",
                    agent="planner",
                    correlation_id=correlation_id,
                    reason=type(exc).__name__,
                    details=str(exc),
                )
                raise PlanGenerationError() from exc

            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="planner",
                method="generate_plan",
                correlation_id=correlation_id,
                college_day_count=sum(1 for day in plan.days if day.has_college),
                item_count=sum(len(day.outfit_items) for day in plan.days),
            )
            return plan


__all__ = ["PlanGeneratorAgent"]
