"""Local edits to a weekly plan.

Edits never contact the model. Each function returns a new :class:`WeeklyPlan`
and leaves its input untouched.
"""

from __future__ import annotations

import secrets
import string
from typing import Callable, Optional, Set

from campus_app.errors import DayIndexError, InvalidItemNameError
from models.plan import DailyPlan, OutfitItem, WeeklyPlan
from models.taxonomy import ItemType

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 9


def generate_item_id() -> str:
    """Short random base-36 token."""

    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def _fresh_id(existing: Set[str], id_factory: Callable[[], str]) -> str:
    candidate = id_factory()
    while not candidate or candidate in existing:
        candidate = id_factory()
    return candidate


def day_at(plan: WeeklyPlan, day_index: int) -> DailyPlan:
    if not 0 <= day_index < len(plan.days):
        raise DayIndexError(f"Day index {day_index} is outside 0..{len(plan.days) - 1}")
    return plan.days[day_index]


def _replace_day(plan: WeeklyPlan, day_index: int, day: DailyPlan) -> WeeklyPlan:
    days = list(plan.days)
    days[day_index] = day
    return plan.model_copy(update={"days": days})


def add_item(
    plan: WeeklyPlan,
    day_index: int,
    name: str,
    *,
    color: Optional[str] = None,
    id_factory: Callable[[], str] = generate_item_id,
) -> WeeklyPlan:
    """Append a manually entered item of type ``other`` to one day."""

    day = day_at(plan, day_index)
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidItemNameError("Item name must not be empty")

    item = OutfitItem(
        id=_fresh_id(day.item_ids(), id_factory),
        name=cleaned,
        type=ItemType.OTHER,
        color=color,
    )
    updated = day.model_copy(update={"outfit_items": [*day.outfit_items, item]})
    return _replace_day(plan, day_index, updated)


def remove_item(plan: WeeklyPlan, day_index: int, item_id: str) -> WeeklyPlan:
    """Drop the item with ``item_id`` from one day. Unknown ids change nothing."""

    day = day_at(plan, day_index)
    remaining = [item for item in day.outfit_items if item.id != item_id]
    if len(remaining) == len(day.outfit_items):
        return plan
    updated = day.model_copy(update={"outfit_items": remaining})
    return _replace_day(plan, day_index, updated)


__all__ = ["add_item", "day_at", "generate_item_id", "remove_item"]
