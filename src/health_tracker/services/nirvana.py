"""Mobility and training session log."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from health_tracker.domain.nirvana import DIFFICULTIES, Difficulty, NirvanaSession
from health_tracker.services.validation import (
    require_choice,
    require_number,
    require_text,
)

MIN_QUALITY = 1
MAX_QUALITY = 5


class NirvanaRepository(Protocol):
    """Persistence interface for Nirvana sessions."""

    def create_session(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NirvanaSession:
        """Insert a session and return it."""

    def list_sessions(
        self, user_id: UUID, start: date | None = None
    ) -> list[NirvanaSession]:
        """Return sessions on or after ``start``, oldest first."""


@dataclass
class NirvanaService:
    """Application service for Nirvana sessions."""

    repository: NirvanaRepository

    def log_session(  # noqa: PLR0913
        self,
        user_id: UUID,
        session_date: date,
        session_type: str,
        duration_minutes: float,
        difficulty: Difficulty,
        quality_rating: int,
        exercises: list[str] | None = None,
        body_parts: list[str] | None = None,
        notes: str | None = None,
    ) -> NirvanaSession:
        """Record a session."""
        quality = require_number(
            "quality_rating", quality_rating, minimum=MIN_QUALITY, maximum=MAX_QUALITY
        )
        payload: dict[str, object] = {
            "session_date": session_date.isoformat(),
            "session_type": require_text("session_type", session_type),
            "duration_minutes": require_number("duration_minutes", duration_minutes),
            "difficulty": require_choice("difficulty", difficulty, DIFFICULTIES),
            "quality_rating": int(quality),
            "exercises": list(exercises or []),
            "body_parts": list(body_parts or []),
            "notes": notes,
        }
        return self.repository.create_session(user_id, payload)

    def list_sessions(
        self, user_id: UUID, since: date | None = None
    ) -> list[NirvanaSession]:
        """Return the user's sessions, optionally from ``since`` onward."""
        return self.repository.list_sessions(user_id, since)
