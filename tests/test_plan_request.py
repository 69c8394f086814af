"""Plan request builder: prompt slots, schema and photo handling."""

import pytest

from logic.plan_request import PHOTO_PROMPT, build_plan_request, prompt_slots, render_plan_prompt, weekly_plan_schema
from models.preferences import PhotoAttachment, Preferences
from models.taxonomy import WEEKDAYS, DayOfWeek, Gender, Season, StylePreference


def _college_line(prompt: str) -> str:
    return next(line for line in prompt.splitlines() if line.startswith("- College Days:"))


@pytest.mark.parametrize(
    "college_days",
    [
        [],
        [DayOfWeek.MONDAY],
        [DayOfWeek.SUNDAY, DayOfWeek.TUESDAY],
        list(WEEKDAYS[:5]),
        list(WEEKDAYS),
    ],
)
def test_college_line_lists_exactly_the_selected_days(college_days) -> None:
    prompt = render_plan_prompt(Preferences(college_days=college_days))
    line = _college_line(prompt)

    for day in WEEKDAYS:
        if day in college_days:
            assert day.value in line
        else:
            assert day.value not in line


def test_college_days_render_in_calendar_order() -> None:
    prefs = Preferences(college_days=[DayOfWeek.FRIDAY, DayOfWeek.MONDAY, DayOfWeek.FRIDAY])

    slots = prompt_slots(prefs)

    assert slots["college_days"] == "Monday, Friday"
    assert slots["off_days"] == "Tuesday, Wednesday, Thursday, Saturday, Sunday"


def test_prompt_carries_every_preference_slot() -> None:
    prefs = Preferences(
        gender=Gender.FEMALE,
        college_days=[DayOfWeek.TUESDAY],
        start_time="10:15",
        end_time="15:45",
        season=Season.WINTER,
        style=StylePreference.VINTAGE,
        additional_instructions="  I love earth tones  ",
    )

    prompt = render_plan_prompt(prefs)

    assert "Gender: Female" in prompt
    assert "College Hours: 10:15 to 15:45" in prompt
    assert "Season: Winter" in prompt
    assert "Style Preference: Vintage / Retro" in prompt
    assert "Additional Notes: I love earth tones" in prompt
    assert "non-college days" in prompt
    assert "accessories" in prompt


def test_empty_notes_and_days_render_as_none() -> None:
    slots = prompt_slots(Preferences(college_days=[], additional_instructions=""))

    assert slots["college_days"] == "None"
    assert slots["additional_notes"] == "None"


def test_schema_requires_day_and_item_fields() -> None:
    schema = weekly_plan_schema()

    assert schema["type"] == "ARRAY"
    assert schema["minItems"] == schema["maxItems"] == 7
    day = schema["items"]
    assert set(day["required"]) == {"day", "hasCollege", "outfitItems", "reasoning", "weatherTip"}
    assert day["properties"]["day"]["enum"] == [d.value for d in WEEKDAYS]
    item = day["properties"]["outfitItems"]["items"]
    assert set(item["required"]) == {"id", "name", "type"}
    assert "color" in item["properties"]
    assert item["properties"]["type"]["enum"] == ["top", "bottom", "outerwear", "shoes", "accessory", "other"]


def test_request_without_photo_has_no_photo_instruction() -> None:
    request = build_plan_request(Preferences())

    assert request.photo is None
    assert request.photo_instruction is None
    assert not request.has_photo
    assert "stylist" in request.system_instruction.lower()


def test_photo_is_attached_with_tailoring_instruction() -> None:
    photo = PhotoAttachment(data=b"\xff\xd8\xff\xe0fake", mime_type="image/jpg")

    request = build_plan_request(Preferences(photo=photo))

    assert request.has_photo
    assert request.photo.mime_type == "image/jpeg"
    assert request.photo_instruction == PHOTO_PROMPT
    assert "skin tone" in request.photo_instruction


def test_unsupported_photo_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        PhotoAttachment(data=b"GIF89a", mime_type="image/gif")


def test_malformed_time_is_rejected() -> None:
    with pytest.raises(ValueError):
        Preferences(start_time="9am")
