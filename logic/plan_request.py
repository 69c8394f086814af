"""Build the Gemini request for a weekly outfit plan.

The prompt is rendered from a template with one named slot per preference
field so it can be tested without touching the network. The response schema
uses the Gemini OpenAPI subset (upper-case type names).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from logic.safety import system_instruction
from models.preferences import PhotoAttachment, Preferences
from models.taxonomy import ITEM_TYPE_NAMES, WEEKDAY_NAMES, DayOfWeek

PLAN_PROMPT_TEMPLATE = """\
Act as a professional stylist for a college student.
Generate a 7-day outfit plan (Monday to Sunday).

Student Profile:
- Gender: {gender}
- College Days: {college_days}
- Off Days: {off_days}
- College Hours: {start_time} to {end_time}
- Season: {season}
- Style Preference: {style}
- Additional Notes: {additional_notes}

Guidance:
- For college days, ensure the outfit is comfortable for the duration and appropriate for a campus setting.
- For non-college days, suggest outfits suitable for studying at home, running errands, or relaxing, or going out if it's the weekend.
- Consider the season for fabric choices and layering.
- Suggest accessories (bags, jewelry, hats, tech).

Output JSON Schema requirements:
- Return an array of exactly 7 objects, one for each day of the week, Monday first.
- Set hasCollege to true only for the college days listed above.
- Give every outfit item an id that is unique within its day.
- Items should be descriptive (e.g., "Oversized Beige Hoodie", "Navy Pleated Skirt").
"""

PHOTO_PROMPT = (
    "Also analyze the uploaded photo of the student to infer their body type, skin tone, "
    "and current vibe to tailor the color palette and fit recommendations accordingly."
)

STYLIST_SYSTEM_INSTRUCTION = system_instruction("weekly outfit stylist for college students")

_EMPTY = "None"


@dataclass(frozen=True)
class PlanRequest:
    """Everything needed for one plan-generation call."""

    instruction: str
    response_schema: Dict[str, Any]
    system_instruction: str = STYLIST_SYSTEM_INSTRUCTION
    photo: Optional[PhotoAttachment] = None
    photo_instruction: Optional[str] = None

    @property
    def has_photo(self) -> bool:
        return self.photo is not None


def _join_days(days: Iterable[DayOfWeek]) -> str:
    names = [day.value for day in days]
    return ", ".join(names) if names else _EMPTY


def prompt_slots(preferences: Preferences) -> Dict[str, str]:
    """Map preference fields to the named template slots."""

    return {
        "gender": preferences.gender.value,
        "college_days": _join_days(preferences.college_days),
        "off_days": _join_days(preferences.off_days),
        "start_time": preferences.start_time,
        "end_time": preferences.end_time,
        "season": preferences.season.value,
        "style": preferences.style.value,
        "additional_notes": preferences.additional_instructions or _EMPTY,
    }


def render_plan_prompt(preferences: Preferences) -> str:
    return PLAN_PROMPT_TEMPLATE.format(**prompt_slots(preferences))


def weekly_plan_schema() -> Dict[str, Any]:
    """Strict output shape: an array of day objects."""

    outfit_item = {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "STRING"},
            "name": {"type": "STRING"},
            "type": {"type": "STRING", "enum": list(ITEM_TYPE_NAMES)},
            "color": {"type": "STRING"},
        },
        "required": ["id", "name", "type"],
    }
    daily_plan = {
        "type": "OBJECT",
        "properties": {
            "day": {"type": "STRING", "enum": list(WEEKDAY_NAMES)},
            "hasCollege": {"type": "BOOLEAN"},
            "outfitItems": {"type": "ARRAY", "items": outfit_item},
            "reasoning": {"type": "STRING"},
            "weatherTip": {"type": "STRING"},
        },
        "required": ["day", "hasCollege", "outfitItems", "reasoning", "weatherTip"],
    }
    return {
        "type": "ARRAY",
        "items": daily_plan,
        "minItems": len(WEEKDAY_NAMES),
        "maxItems": len(WEEKDAY_NAMES),
    }


def build_plan_request(preferences: Preferences) -> PlanRequest:
    """Turn preferences into the instruction text, schema and optional photo."""

    photo = preferences.photo
    return PlanRequest(
        instruction=render_plan_prompt(preferences),
        response_schema=weekly_plan_schema(),
        photo=photo,
        photo_instruction=PHOTO_PROMPT if photo is not None else None,
    )


__all__ = [
    "PHOTO_PROMPT",
    "PLAN_PROMPT_TEMPLATE",
    "PlanRequest",
    "build_plan_request",
    "prompt_slots",
    "render_plan_prompt",
    "weekly_plan_schema",
]
