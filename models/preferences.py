"""Student preference model submitted for one plan request."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.taxonomy import DayOfWeek, Gender, Season, StylePreference, calendar_order

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

SUPPORTED_PHOTO_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")

DEFAULT_COLLEGE_DAYS = [
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
]


class PhotoAttachment(BaseModel):
    """Raw image bytes plus their mime type."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(min_length=1, repr=False)
    mime_type: str = "image/jpeg"

    @field_validator("mime_type")
    @classmethod
    def _supported_mime(cls, value: str) -> str:
        normalised = value.strip().lower()
        if normalised == "image/jpg":
            normalised = "image/jpeg"
        if normalised not in SUPPORTED_PHOTO_MIME_TYPES:
            raise ValueError(f"Unsupported photo type {value!r}")
        return normalised


class Preferences(BaseModel):
    """Everything the stylist needs to know about the student for one week."""

    model_config = ConfigDict(frozen=True)

    gender: Gender = Gender.UNISEX
    college_days: List[DayOfWeek] = Field(default_factory=lambda: list(DEFAULT_COLLEGE_DAYS))
    start_time: str = Field(default="09:00", pattern=TIME_PATTERN)
    end_time: str = Field(default="17:00", pattern=TIME_PATTERN)
    season: Season = Season.AUTUMN
    style: StylePreference = StylePreference.CASUAL
    additional_instructions: str = ""
    photo: Optional[PhotoAttachment] = None

    @field_validator("college_days")
    @classmethod
    def _normalise_days(cls, value: List[DayOfWeek]) -> List[DayOfWeek]:
        return calendar_order(value)

    @field_validator("additional_instructions")
    @classmethod
    def _strip_notes(cls, value: str) -> str:
        return value.strip()

    @property
    def off_days(self) -> List[DayOfWeek]:
        return [day for day in DayOfWeek if day not in self.college_days]

    @property
    def hours_look_inverted(self) -> bool:
        """End time at or before start time. Advisory only."""

        return self.end_time <= self.start_time


__all__ = ["DEFAULT_COLLEGE_DAYS", "TIME_PATTERN", "PhotoAttachment", "Preferences", "SUPPORTED_PHOTO_MIME_TYPES"]
