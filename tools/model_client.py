"""Gemini client abstraction with a live and an offline implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from campus_app.config import DEFAULT_GEMINI_MODEL, AppConfig
from campus_app.errors import ConfigurationError, RemoteModelError
from campus_app.logging_config import get_logger, log_event
from logic.plan_request import PlanRequest
from models.shopping import SearchReply, WebCitation
from tools.observability import instrument_call

LOGGER = get_logger(__name__)


class ModelClient(ABC):
    """The two remote capabilities the app depends on."""

    @abstractmethod
    def generate_plan(self, request: PlanRequest) -> Optional[str]:
        """Return the raw JSON text of the plan, or ``None`` when the model said nothing."""

    @abstractmethod
    def search(self, prompt: str) -> SearchReply:
        """Run a search-grounded prompt and return its text and web citations."""


def extract_citations(response: Any) -> List[WebCitation]:
    """Read web citations from the first candidate's grounding metadata."""

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []
    citations: List[WebCitation] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        if web is None:
            continue
        citations.append(WebCitation(title=getattr(web, "title", None), uri=getattr(web, "uri", None)))
    return citations


class GeminiClient(ModelClient):
    """Calls the Gemini API through the ``google-genai`` SDK."""

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_GEMINI_MODEL,
        search_model: str | None = None,
        timeout_seconds: float | None = None,
        client: genai.Client | None = None,
    ) -> None:
        if client is None:
            if not api_key:
                raise ConfigurationError("GeminiClient requires an API key")
            http_options = (
                types.HttpOptions(timeout=int(timeout_seconds * 1000)) if timeout_seconds else None
            )
            client = genai.Client(api_key=api_key, http_options=http_options)
        self._client = client
        self.model = model
        self.search_model = search_model or model

    @classmethod
    def from_config(cls, config: AppConfig) -> "GeminiClient":
        return cls(
            api_key=config.require_api_key(),
            model=config.model,
            search_model=config.shopping_model,
            timeout_seconds=config.timeout_seconds,
        )

    def _plan_contents(self, request: PlanRequest) -> List[types.Content]:
        parts = [types.Part.from_text(text=request.instruction)]
        if request.photo is not None:
            parts.append(types.Part.from_bytes(data=request.photo.data, mime_type=request.photo.mime_type))
            if request.photo_instruction:
                parts.append(types.Part.from_text(text=request.photo_instruction))
        return [types.Content(role="user", parts=parts)]

    @instrument_call("gemini.generate_plan")
    def generate_plan(self, request: PlanRequest) -> Optional[str]:
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=self._plan_contents(request),
                config=types.GenerateContentConfig(
                    system_instruction=request.system_instruction,
                    response_mime_type="application/json",
                    response_schema=request.response_schema,
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as exc:
            raise RemoteModelError(f"Plan generation call failed: {exc}") from exc
        return response.text

    @instrument_call("gemini.search")
    def search(self, prompt: str) -> SearchReply:
        try:
            response = self._client.models.generate_content(
                model=self.search_model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as exc:
            raise RemoteModelError(f"Search call failed: {exc}") from exc
        citations = extract_citations(response)
        log_event(LOGGER, logging.INFO, "search_reply_received", citation_count=len(citations))
        return SearchReply(text=response.text, citations=citations)


class MockModelClient(ModelClient):
    """Offline deterministic client for tests, evaluation and demos."""

    def __init__(
        self,
        plan_text: Optional[str] = None,
        search_reply: SearchReply | None = None,
        plan_error: Exception | None = None,
        search_error: Exception | None = None,
    ) -> None:
        self.plan_text = plan_text
        self.search_reply = search_reply or SearchReply(text=None, citations=[])
        self.plan_error = plan_error
        self.search_error = search_error
        self.plan_requests: List[PlanRequest] = []
        self.search_prompts: List[str] = []

    def generate_plan(self, request: PlanRequest) -> Optional[str]:
        self.plan_requests.append(request)
        if self.plan_error is not None:
            raise self.plan_error
        log_event(LOGGER, logging.DEBUG, "mock_plan_reply", has_text=self.plan_text is not None)
        return self.plan_text

    def search(self, prompt: str) -> SearchReply:
        self.search_prompts.append(prompt)
        if self.search_error is not None:
            raise self.search_error
        return self.search_reply


__all__ = ["ModelClient", "GeminiClient", "MockModelClient", "extract_citations"]
