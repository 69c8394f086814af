"""Weekly outfit plan schemas.

Field aliases follow the camelCase JSON the model is asked to return, so the
same models validate the reply and serialise the plan back out.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models.taxonomy import WEEKDAYS, DayOfWeek, ItemType

PLAN_LENGTH = len(WEEKDAYS)


class OutfitItem(BaseModel):
    """A single garment or accessory within one day's outfit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    type: ItemType
    color: Optional[str] = None

    @field_validator("id", "name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("color")
    @classmethod
    def _empty_color_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    def shopping_query(self) -> str:
        """Free-text query used to look this item up in shops."""

        parts = [self.name, self.color or "", "fashion"]
        return " ".join(" ".join(parts).split())


class DailyPlan(BaseModel):
    """One day of the weekly plan."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    day: DayOfWeek
    has_college: bool = Field(alias="hasCollege", strict=True)
    outfit_items: List[OutfitItem] = Field(alias="outfitItems")
    reasoning: str
    weather_tip: str = Field(alias="weatherTip")

    @field_validator("outfit_items")
    @classmethod
    def _unique_item_ids(cls, items: List[OutfitItem]) -> List[OutfitItem]:
        seen: set[str] = set()
        for item in items:
            if item.id in seen:
                raise ValueError(f"duplicate item id {item.id!r}")
            seen.add(item.id)
        return items

    def item_ids(self) -> set[str]:
        return {item.id for item in self.outfit_items}

    def find_item(self, item_id: str) -> Optional[OutfitItem]:
        for item in self.outfit_items:
            if item.id == item_id:
                return item
        return None


class WeeklyPlan(BaseModel):
    """Seven daily plans, one per weekday, in the order the model returned them."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    days: List[DailyPlan]

    @model_validator(mode="after")
    def _one_entry_per_weekday(self) -> "WeeklyPlan":
        if len(self.days) != PLAN_LENGTH:
            raise ValueError(f"expected {PLAN_LENGTH} days, got {len(self.days)}")
        returned = [entry.day for entry in self.days]
        duplicates = sorted({day.value for day in returned if returned.count(day) > 1})
        if duplicates:
            raise ValueError(f"duplicate weekdays: {', '.join(duplicates)}")
        return self

    def __len__(self) -> int:
        return len(self.days)

    def __getitem__(self, index: int) -> DailyPlan:
        return self.days[index]

    def for_day(self, day: DayOfWeek) -> DailyPlan:
        for entry in self.days:
            if entry.day == day:
                return entry
        raise KeyError(day)

    def to_json_data(self) -> list:
        """Serialise to the camelCase array shape the model produced."""

        return [entry.model_dump(mode="json", by_alias=True) for entry in self.days]


__all__ = ["PLAN_LENGTH", "OutfitItem", "DailyPlan", "WeeklyPlan"]
