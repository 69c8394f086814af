"""Canonical labels for preferences, weekdays and outfit item types.

Enum values are the exact strings exchanged with the model and shown to the
user, so they double as the JSON wire format.
"""

from enum import Enum
from typing import Iterable, List


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    NON_BINARY = "Non-binary"
    UNISEX = "Unisex / No Preference"


class Season(str, Enum):
    SPRING = "Spring"
    SUMMER = "Summer"
    AUTUMN = "Autumn"
    WINTER = "Winter"


class StylePreference(str, Enum):
    CASUAL = "Casual & Comfy"
    CHIC = "Chic & Trendy"
    FORMAL = "Academic Formal"
    STREETWEAR = "Streetwear"
    MINIMALIST = "Minimalist"
    VINTAGE = "Vintage / Retro"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class ItemType(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    OUTERWEAR = "outerwear"
    SHOES = "shoes"
    ACCESSORY = "accessory"
    OTHER = "other"


WEEKDAYS: List[DayOfWeek] = list(DayOfWeek)
WEEKDAY_NAMES: List[str] = [day.value for day in DayOfWeek]
ITEM_TYPE_NAMES: List[str] = [item_type.value for item_type in ItemType]


def calendar_order(days: Iterable[DayOfWeek]) -> List[DayOfWeek]:
    """De-duplicate weekdays and return them Monday first."""

    selected = set(days)
    return [day for day in WEEKDAYS if day in selected]


def parse_day(value: str) -> DayOfWeek:
    """Resolve a weekday from its full name or a three-letter prefix."""

    key = value.strip().lower()
    for day in WEEKDAYS:
        if key == day.value.lower() or (len(key) >= 3 and day.value.lower().startswith(key)):
            return day
    raise ValueError(f"Unknown weekday: {value!r}")


__all__ = [
    "Gender",
    "Season",
    "StylePreference",
    "DayOfWeek",
    "ItemType",
    "WEEKDAYS",
    "WEEKDAY_NAMES",
    "ITEM_TYPE_NAMES",
    "calendar_order",
    "parse_day",
]
