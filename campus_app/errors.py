"""Exception hierarchy shared by the CampusStyle components."""

from __future__ import annotations

PLAN_GENERATION_FAILED = "Something went wrong while generating your plan. Please try again."
SHOPPING_LOOKUP_FAILED = "Could not fetch shopping suggestions."


class CampusStyleError(Exception):
    """Base class for every error raised by this project."""


class ConfigurationError(CampusStyleError):
    """Raised when required configuration such as the API key is missing."""


class RemoteModelError(CampusStyleError):
    """Raised when the Gemini API call itself fails (transport, auth, quota)."""


class PlanParseError(CampusStyleError):
    """Raised when a model reply cannot be turned into a weekly plan."""


class EmptyModelResponseError(PlanParseError):
    """The model returned no text at all."""


class MalformedPlanError(PlanParseError):
    """The reply text is not a JSON array."""


class PlanSchemaError(PlanParseError):
    """The reply decoded but does not match the weekly plan schema."""


class PlanGenerationError(CampusStyleError):
    """User-facing failure of a plan generation request."""

    def __init__(self, message: str = PLAN_GENERATION_FAILED) -> None:
        super().__init__(message)
        self.message = message


class PlanEditError(CampusStyleError):
    """Raised when a local plan edit is rejected."""


class InvalidItemNameError(PlanEditError, ValueError):
    """A manually added item needs a non-empty name."""


class DayIndexError(PlanEditError, IndexError):
    """The day index does not point at a day of the plan."""


class ShoppingLookupError(CampusStyleError):
    """User-facing failure of a shopping lookup."""

    def __init__(self, message: str = SHOPPING_LOOKUP_FAILED) -> None:
        super().__init__(message)
        self.message = message


class PhotoError(CampusStyleError, ValueError):
    """The supplied photo could not be read or is not a supported image."""


class SessionNotFoundError(CampusStyleError):
    """No plan session exists for the given id."""


class GenerationInProgressError(CampusStyleError):
    """A plan generation is already running for the session."""


class NoPlanError(CampusStyleError):
    """The session has no plan to edit or shop from yet."""


class ItemNotFoundError(CampusStyleError):
    """No outfit item with the given id exists on that day."""


__all__ = [
    "PLAN_GENERATION_FAILED",
    "SHOPPING_LOOKUP_FAILED",
    "CampusStyleError",
    "ConfigurationError",
    "RemoteModelError",
    "PlanParseError",
    "EmptyModelResponseError",
    "MalformedPlanError",
    "PlanSchemaError",
    "PlanGenerationError",
    "PlanEditError",
    "InvalidItemNameError",
    "DayIndexError",
    "ShoppingLookupError",
    "PhotoError",
    "SessionNotFoundError",
    "GenerationInProgressError",
    "NoPlanError",
    "ItemNotFoundError",
]
