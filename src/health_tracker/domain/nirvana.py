"""Domain models for mobility and training sessions."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal
from uuid import UUID

Difficulty = Literal["beginner", "intermediate", "advanced"]

DIFFICULTIES: frozenset[str] = frozenset({"beginner", "intermediate", "advanced"})


@dataclass(frozen=True)
class NirvanaSession:
    """A logged mobility/training session."""

    id: UUID
    user_id: UUID
    session_date: date
    session_type: str
    duration_minutes: float
    difficulty: Difficulty
    quality_rating: int
    exercises: list[str] = field(default_factory=list)
    body_parts: list[str] = field(default_factory=list)
    notes: str | None = None
