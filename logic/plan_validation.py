"""Decode and validate the model's weekly plan reply.

This is the only place untrusted model output becomes typed data. Every
failure is raised as a :class:`PlanParseError` subclass and no partial plan is
ever returned. Text fields are kept verbatim; rendering them safely is the
caller's job.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from campus_app.errors import EmptyModelResponseError, MalformedPlanError, PlanSchemaError
from campus_app.logging_config import get_logger, log_event
from models.plan import WeeklyPlan

LOGGER = get_logger(__name__)


def _summarise_errors(exc: ValidationError, limit: int = 5) -> List[Dict[str, Any]]:
    """Keep location and message only; model text never reaches the logs."""

    return [
        {"loc": ".".join(str(part) for part in error.get("loc", ())), "msg": error.get("msg")}
        for error in exc.errors()[:limit]
    ]


def decode_plan_json(raw_text: Optional[str]) -> List[Any]:
    """Return the decoded JSON array or raise."""

    if raw_text is None or not raw_text.strip():
        raise EmptyModelResponseError("The model returned no text")
    try:
        decoded = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise MalformedPlanError(f"Reply is not valid JSON: {exc.msg} at position {exc.pos}") from exc
    if not isinstance(decoded, list):
        raise MalformedPlanError(f"Expected a JSON array, got {type(decoded).__name__}")
    return decoded


def parse_weekly_plan(raw_text: Optional[str]) -> WeeklyPlan:
    """Decode ``raw_text`` into a :class:`WeeklyPlan`.

    The array must hold exactly seven day objects covering each weekday once.
    Day order is preserved as returned. Missing required fields, unknown item
    types, blank ids or names and duplicate item ids within a day are all
    rejected.
    """

    entries = decode_plan_json(raw_text)
    try:
        plan = WeeklyPlan.model_validate({"days": entries})
    except ValidationError as exc:
        log_event(
            LOGGER,
            logging.WARNING,
            "plan_schema_rejected",
            entry_count=len(entries),
            errors=_summarise_errors(exc),
        )
        raise PlanSchemaError(f"Reply does not match the weekly plan schema ({exc.error_count()} errors)") from exc
    return plan


__all__ = ["decode_plan_json", "parse_weekly_plan"]
