"""In-memory plan sessions: the state a front-end holds between actions.

Nothing here survives a restart. A lock guards the store because the HTTP
server runs handlers on a thread pool.
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from campus_app.errors import GenerationInProgressError, NoPlanError, SessionNotFoundError
from models.plan import WeeklyPlan
from models.shopping import ShoppingLookupResult


@dataclass
class LookupSurface:
    """The one shopping lookup a session is currently showing.

    Every ``open`` issues a new token. Results delivered with a stale token, or
    after the surface was closed, are dropped.
    """

    token: Optional[str] = None
    query: Optional[str] = None
    is_open: bool = False
    is_loading: bool = False
    result: Optional[ShoppingLookupResult] = None
    error: Optional[str] = None

    def open(self, query: str) -> str:
        self.token = uuid4().hex
        self.query = query
        self.is_open = True
        self.is_loading = True
        self.result = None
        self.error = None
        return self.token

    def close(self) -> None:
        self.token = None
        self.query = None
        self.is_open = False
        self.is_loading = False
        self.result = None
        self.error = None

    def accepts(self, token: str) -> bool:
        return self.is_open and token == self.token

    def deliver(self, token: str, result: ShoppingLookupResult) -> bool:
        if not self.accepts(token):
            return False
        self.result = result
        self.is_loading = False
        return True

    def fail(self, token: str, message: str) -> bool:
        if not self.accepts(token):
            return False
        self.error = message
        self.is_loading = False
        return True

    def snapshot(self) -> Dict[str, Any]:
        return {
            "is_open": self.is_open,
            "is_loading": self.is_loading,
            "query": self.query,
            "result": self.result.model_dump(mode="json") if self.result else None,
            "error": self.error,
        }


@dataclass
class PlanSession:
    """Current plan, loading flag, latest error and lookup surface."""

    session_id: str
    plan: Optional[WeeklyPlan] = None
    error: Optional[str] = None
    is_loading: bool = False
    lookup: LookupSurface = field(default_factory=LookupSurface)
    created_at: float = field(default_factory=lambda: time.time())

    def snapshot(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "plan": self.plan.to_json_data() if self.plan else None,
            "error": self.error,
            "is_loading": self.is_loading,
            "lookup": self.lookup.snapshot(),
        }


class PlanSessionStore:
    """Thread-safe registry of :class:`PlanSession` objects."""

    def __init__(self) -> None:
        self._sessions: Dict[str, PlanSession] = {}
        self._lock = threading.RLock()

    def create_session(self) -> str:
        session_id = uuid4().hex
        with self._lock:
            self._sessions[session_id] = PlanSession(session_id=session_id)
        return session_id

    def session_exists(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def _get(self, session_id: str) -> PlanSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Unknown session {session_id}") from None

    def snapshot(self, session_id: str) -> Dict[str, Any]:
        with self._lock:
            return self._get(session_id).snapshot()

    def current_plan(self, session_id: str) -> Optional[WeeklyPlan]:
        with self._lock:
            return self._get(session_id).plan

    def begin_generation(self, session_id: str) -> None:
        with self._lock:
            session = self._get(session_id)
            if session.is_loading:
                raise GenerationInProgressError("A plan is already being generated for this session")
            session.is_loading = True
            session.error = None

    def complete_generation(self, session_id: str, plan: WeeklyPlan) -> None:
        with self._lock:
            session = self._get(session_id)
            session.plan = plan
            session.is_loading = False
            session.lookup.close()

    def fail_generation(self, session_id: str, message: str) -> None:
        with self._lock:
            session = self._get(session_id)
            session.error = message
            session.is_loading = False

    def update_plan(self, session_id: str, edit: Callable[[WeeklyPlan], WeeklyPlan]) -> WeeklyPlan:
        """Apply ``edit`` to the held plan atomically and store the result."""

        with self._lock:
            session = self._get(session_id)
            if session.plan is None:
                raise NoPlanError("Generate a plan before editing it")
            session.plan = edit(session.plan)
            return session.plan

    def reset(self, session_id: str) -> None:
        with self._lock:
            session = self._get(session_id)
            session.plan = None
            session.error = None
            session.lookup.close()

    def dismiss_error(self, session_id: str) -> None:
        with self._lock:
            self._get(session_id).error = None

    def open_lookup(self, session_id: str, query: str) -> str:
        with self._lock:
            return self._get(session_id).lookup.open(query)

    def deliver_lookup(self, session_id: str, token: str, result: ShoppingLookupResult) -> bool:
        with self._lock:
            return self._get(session_id).lookup.deliver(token, result)

    def fail_lookup(self, session_id: str, token: str, message: str) -> bool:
        with self._lock:
            return self._get(session_id).lookup.fail(token, message)

    def close_lookup(self, session_id: str) -> None:
        with self._lock:
            self._get(session_id).lookup.close()

    def delete_session(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)


__all__ = ["LookupSurface", "PlanSession", "PlanSessionStore"]
