"""Evaluation scenarios exercising schedules, seasons, photos and bad replies."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from models.preferences import PhotoAttachment, Preferences
from models.taxonomy import WEEKDAYS, DayOfWeek, Gender, Season, StylePreference

# Smallest valid PNG header plus padding; only the magic bytes matter here.
TINY_PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@dataclass
class EvaluationScenario:
    name: str
    description: str
    preferences: Preferences
    reply_text: Optional[str]
    expectations: Dict[str, object] = field(default_factory=dict)


def _day_entry(day: DayOfWeek, has_college: bool) -> Dict[str, object]:
    prefix = day.value[:3].lower()
    if has_college:
        items = [
            {"id": f"{prefix}-1", "name": "Relaxed Oxford Shirt", "type": "top", "color": "light blue"},
            {"id": f"{prefix}-2", "name": "Straight Leg Chinos", "type": "bottom", "color": "khaki"},
            {"id": f"{prefix}-3", "name": "White Canvas Sneakers", "type": "shoes"},
            {"id": f"{prefix}-4", "name": "Canvas Laptop Backpack", "type": "accessory", "color": "olive"},
        ]
        reasoning = "Comfortable layers for a full day of lectures."
    else:
        items = [
            {"id": f"{prefix}-1", "name": "Oversized Beige Hoodie", "type": "top", "color": "beige"},
            {"id": f"{prefix}-2", "name": "Jogger Sweatpants", "type": "bottom", "color": "grey"},
        ]
        reasoning = "Easy pieces for errands and studying at home."
    return {
        "day": day.value,
        "hasCollege": has_college,
        "outfitItems": items,
        "reasoning": reasoning,
        "weatherTip": "Carry a light layer for the evening.",
    }


def sample_plan_entries(college_days: Sequence[DayOfWeek], days: Sequence[DayOfWeek] = WEEKDAYS) -> List[Dict[str, object]]:
    """Well-formed reply entries marking ``college_days`` as college."""

    selected = set(college_days)
    return [_day_entry(day, day in selected) for day in days]


def sample_plan_json(college_days: Sequence[DayOfWeek], days: Sequence[DayOfWeek] = WEEKDAYS) -> str:
    return json.dumps(sample_plan_entries(college_days, days))


WEEKDAYS_MON_FRI = list(WEEKDAYS[:5])
MON_WED_FRI = [DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY, DayOfWeek.FRIDAY]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="spring_casual_weekdays",
        description="Female student, classes Monday to Friday, spring, casual style, no photo.",
        preferences=Preferences(
            gender=Gender.FEMALE,
            college_days=WEEKDAYS_MON_FRI,
            season=Season.SPRING,
            style=StylePreference.CASUAL,
        ),
        reply_text=sample_plan_json(WEEKDAYS_MON_FRI),
        expectations={"plan_ok": True, "college_days": WEEKDAYS_MON_FRI, "photo_attached": False},
    ),
    EvaluationScenario(
        name="winter_formal_with_photo",
        description="Three college days in winter with a photo for color and fit tailoring.",
        preferences=Preferences(
            gender=Gender.MALE,
            college_days=[DayOfWeek.FRIDAY, DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY],
            start_time="08:30",
            end_time="14:00",
            season=Season.WINTER,
            style=StylePreference.FORMAL,
            additional_instructions="I bike to campus.",
            photo=PhotoAttachment(data=TINY_PNG, mime_type="image/png"),
        ),
        reply_text=sample_plan_json(MON_WED_FRI),
        expectations={"plan_ok": True, "college_days": MON_WED_FRI, "photo_attached": True},
    ),
    EvaluationScenario(
        name="summer_break_no_college",
        description="No college days at all; every day is an off day.",
        preferences=Preferences(
            gender=Gender.NON_BINARY,
            college_days=[],
            season=Season.SUMMER,
            style=StylePreference.STREETWEAR,
        ),
        reply_text=sample_plan_json([]),
        expectations={"plan_ok": True, "college_days": [], "photo_attached": False},
    ),
    EvaluationScenario(
        name="truncated_reply_rejected",
        description="The model stops mid-array; no plan may be shown.",
        preferences=Preferences(),
        reply_text=sample_plan_json(WEEKDAYS_MON_FRI)[:-40],
        expectations={"plan_ok": False},
    ),
    EvaluationScenario(
        name="missing_weekday_rejected",
        description="The model returns only six days.",
        preferences=Preferences(),
        reply_text=sample_plan_json(WEEKDAYS_MON_FRI, days=WEEKDAYS[:6]),
        expectations={"plan_ok": False},
    ),
]


__all__ = [
    "EvaluationScenario",
    "SCENARIOS",
    "TINY_PNG",
    "sample_plan_entries",
    "sample_plan_json",
]
