"""FastAPI server exposing plan sessions, edits and shopping lookups."""

from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from campus_app.app import CampusStyleApp
from campus_app.errors import (
    CampusStyleError,
    GenerationInProgressError,
    ItemNotFoundError,
    NoPlanError,
    PhotoError,
    PlanEditError,
    PlanGenerationError,
    SessionNotFoundError,
    ShoppingLookupError,
)
from campus_app.logging_config import configure_logging
from models.preferences import DEFAULT_COLLEGE_DAYS, TIME_PATTERN, Preferences
from models.taxonomy import DayOfWeek, Gender, Season, StylePreference
from tools.photo_loader import decode_photo_base64

_STATUS_BY_ERROR = [
    (SessionNotFoundError, 404),
    (ItemNotFoundError, 404),
    (GenerationInProgressError, 409),
    (NoPlanError, 409),
    (PlanEditError, 422),
    (PhotoError, 422),
    (PlanGenerationError, 502),
    (ShoppingLookupError, 502),
]


class PreferencesRequest(BaseModel):
    """Request payload for plan generation. Accepts camelCase keys too."""

    model_config = ConfigDict(populate_by_name=True)

    gender: Gender = Gender.UNISEX
    college_days: List[DayOfWeek] = Field(default_factory=lambda: list(DEFAULT_COLLEGE_DAYS), alias="collegeDays")
    start_time: str = Field("09:00", alias="startTime", pattern=TIME_PATTERN)
    end_time: str = Field("17:00", alias="endTime", pattern=TIME_PATTERN)
    season: Season = Season.AUTUMN
    style: StylePreference = StylePreference.CASUAL
    additional_instructions: str = Field("", alias="additionalInstructions")
    photo_base64: Optional[str] = Field(
        None, alias="userPhotoBase64", description="Raw base64 or a data:image/...;base64, URL"
    )
    photo_mime_type: Optional[str] = Field(None, alias="photoMimeType")

    def to_preferences(self) -> Preferences:
        photo = (
            decode_photo_base64(self.photo_base64, self.photo_mime_type) if self.photo_base64 else None
        )
        return Preferences(
            gender=self.gender,
            college_days=self.college_days,
            start_time=self.start_time,
            end_time=self.end_time,
            season=self.season,
            style=self.style,
            additional_instructions=self.additional_instructions,
            photo=photo,
        )


class AddItemRequest(BaseModel):
    name: str


class ShopItemRequest(BaseModel):
    day_index: int
    item_id: str


class ShoppingQueryRequest(BaseModel):
    query: str = Field(..., description="Free-text item description, e.g. 'Navy Pleated Skirt fashion'")


def _http_error(exc: CampusStyleError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def create_app(concierge: CampusStyleApp | None = None) -> FastAPI:
    """Build the FastAPI instance around a :class:`CampusStyleApp`."""

    configure_logging()
    style_app = concierge or CampusStyleApp()
    app = FastAPI(title="CampusStyle", version="0.1.0")
    app.state.style_app = style_app

    @app.get("/healthz")
    def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "campus-style",
            "environment": style_app.config.environment or "local",
            "model": style_app.config.model,
        }

    @app.post("/sessions")
    def create_session() -> dict:
        return {"session_id": style_app.start_session()}

    @app.get("/sessions/{session_id}")
    def get_session(session_id: str) -> dict:
        try:
            return style_app.session_state(session_id)
        except CampusStyleError as exc:
            raise _http_error(exc) from exc

    @app.post("/sessions/{session_id}/plan")
    def generate_plan(session_id: str, request: PreferencesRequest) -> dict:
        """Generate a weekly plan. Blocks until the model replies."""

        try:
            plan = style_app.generate_plan(session_id, request.to_preferences())
        except CampusStyleError as exc:
            raise _http_error(exc) from exc
        return {"session_id": session_id, "plan": plan.to_json_data()}

    @app.delete("/sessions/{session_id}/plan")
    def reset_plan(session_id: str) -> dict:
        try:
            style_app.reset_plan(session_id)
        except CampusStyleError as exc:
            raise _http_error(exc) from exc
        return {"status": "ok"}

    @app.delete("/sessions/{session_id}/error")
    def dismiss_error(session_id: str) -> dict:
        try:
            style_app.dismiss_error(session_id)
        except CampusStyleError as exc:
            raise _http_error(exc) from exc
        return {"status": "ok"}

    @app.post("/sessions/{session_id}/days/{day_index}/items")
    def add_item(session_id: str, day_index: int, request: AddItemRequest) -> dict:
        try:
            plan = style_app.add_item(session_id, day_index, request.name)
        except CampusStyleError as exc:
            raise _http_error(exc) from exc
        return {"session_id": session_id, "plan": plan.to_json_data()}

    @app.delete("/sessions/{session_id}/days/{day_index}/items/{item_id}")
    def remove_item(session_id: str, day_index: int, item_id: str) -> dict:
        try:
            plan = style_app.remove_item(session_id, day_index, item_id)
        except CampusStyleError as exc:
            raise _http_error(exc) from exc
        return {"session_id": session_id, "plan": plan.to_json_data()}

    @app.post("/sessions/{session_id}/lookups")
    def shop_item(session_id: str, request: ShopItemRequest) -> dict:
        """Open the lookup surface for one item and return its suggestions."""

        try:
            outcome = style_app.shop_item(session_id, request.day_index, request.item_id)
        except CampusStyleError as exc:
            raise _http_error(exc) from exc
        if outcome["status"] != "ok":
            return outcome
        return {**outcome, "result": outcome["result"].model_dump(mode="json")}

    @app.delete("/sessions/{session_id}/lookups")
    def close_lookup(session_id: str) -> dict:
        try:
            style_app.close_lookup(session_id)
        except CampusStyleError as exc:
            raise _http_error(exc) from exc
        return {"status": "ok"}

    @app.post("/shopping")
    def find_shopping(request: ShoppingQueryRequest) -> dict:
        try:
            result = style_app.find_shopping(request.query)
        except CampusStyleError as exc:
            raise _http_error(exc) from exc
        return result.model_dump(mode="json")

    return app


def get_app() -> FastAPI:
    """Expose a FastAPI instance configured from the environment for ASGI servers."""

    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=8080, reload=False)
