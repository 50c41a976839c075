"""Injectable compound catalog and dose logging."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from health_tracker.domain.injections import (
    COMPOUND_CATEGORIES,
    ESTER_TYPES,
    INJECTION_SITES,
    CompoundCategory,
    EsterType,
    InjectableCompound,
    InjectionEntry,
    InjectionSite,
)
from health_tracker.errors import EntityNotFoundError
from health_tracker.services.validation import (
    require_choice,
    require_number,
    require_text,
)


class InjectionRepository(Protocol):
    """Persistence interface for compounds and injections."""

    def create_compound(
        self, user_id: UUID, payload: dict[str, object]
    ) -> InjectableCompound:
        """Insert a compound and return it."""

    def get_compound(self, compound_id: UUID) -> InjectableCompound | None:
        """Return a compound by id, if present."""

    def list_compounds(self, user_id: UUID) -> list[InjectableCompound]:
        """Return a user's compounds ordered by name."""

    def update_compound(
        self, compound_id: UUID, payload: dict[str, object]
    ) -> InjectableCompound:
        """Apply a partial update and return the compound."""

    def delete_compound(self, compound_id: UUID) -> None:
        """Delete a compound."""

    def create_injection(
        self, user_id: UUID, payload: dict[str, object]
    ) -> InjectionEntry:
        """Insert an injection and return it joined with its compound."""

    def list_injections(
        self, user_id: UUID, start: date | None = None
    ) -> list[InjectionEntry]:
        """Return injections on or after ``start``, oldest first."""

    def get_injection(self, injection_id: UUID) -> InjectionEntry | None:
        """Return an injection by id, if present."""

    def delete_injection(self, injection_id: UUID) -> None:
        """Delete an injection."""


@dataclass
class InjectionService:
    """Application service for injectable compounds."""

    repository: InjectionRepository

    def create_compound(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        concentration: float,
        ester_type: EsterType,
        half_life_days: float,
        category: CompoundCategory,
        weekly_target_mg: float,
        notes: str | None = None,
    ) -> InjectableCompound:
        """Add a compound to the user's catalog."""
        payload: dict[str, object] = {
            "name": require_text("name", name),
            "concentration": require_number("concentration", concentration),
            "ester_type": require_choice("ester_type", ester_type, ESTER_TYPES),
            "half_life_days": require_number("half_life_days", half_life_days),
            "category": require_choice("category", category, COMPOUND_CATEGORIES),
            "weekly_target_mg": require_number("weekly_target_mg", weekly_target_mg),
            "notes": notes,
        }
        return self.repository.create_compound(user_id, payload)

    def list_compounds(self, user_id: UUID) -> list[InjectableCompound]:
        """Return the user's compounds."""
        return self.repository.list_compounds(user_id)

    def update_compound(
        self, user_id: UUID, compound_id: UUID, payload: dict[str, object]
    ) -> InjectableCompound:
        """Update catalog fields of one of the user's compounds."""
        self._require_own_compound(user_id, compound_id)
        payload = dict(payload)
        for name in ("concentration", "half_life_days", "weekly_target_mg"):
            if name in payload:
                value = payload[name]
                payload[name] = require_number(name, value)  # type: ignore[arg-type]
        if "ester_type" in payload:
            require_choice("ester_type", str(payload["ester_type"]), ESTER_TYPES)
        if "category" in payload:
            require_choice("category", str(payload["category"]), COMPOUND_CATEGORIES)
        return self.repository.update_compound(compound_id, payload)

    def delete_compound(self, user_id: UUID, compound_id: UUID) -> None:
        """Remove one of the user's compounds from the catalog."""
        self._require_own_compound(user_id, compound_id)
        self.repository.delete_compound(compound_id)

    def log_injection(  # noqa: PLR0913
        self,
        user_id: UUID,
        compound_id: UUID,
        dose_mg: float,
        volume_ml: float,
        injection_site: InjectionSite,
        injection_date: date,
        notes: str | None = None,
    ) -> InjectionEntry:
        """Record a dose of one of the user's compounds."""
        self._require_own_compound(user_id, compound_id)
        payload: dict[str, object] = {
            "compound_id": str(compound_id),
            "dose_mg": require_number("dose_mg", dose_mg, strictly_positive=True),
            "volume_ml": require_number("volume_ml", volume_ml),
            "injection_site": require_choice(
                "injection_site", injection_site, INJECTION_SITES
            ),
            "injection_date": injection_date.isoformat(),
            "notes": notes,
        }
        return self.repository.create_injection(user_id, payload)

    def list_injections(
        self, user_id: UUID, since: date | None = None
    ) -> list[InjectionEntry]:
        """Return the user's injections, optionally from ``since`` onward."""
        return self.repository.list_injections(user_id, since)

    def delete_injection(self, user_id: UUID, injection_id: UUID) -> None:
        """Delete one of the user's logged injections."""
        injection = self.repository.get_injection(injection_id)
        if injection is None or injection.user_id != user_id:
            raise EntityNotFoundError("injection_entry", injection_id)
        self.repository.delete_injection(injection_id)

    def _require_own_compound(
        self, user_id: UUID, compound_id: UUID
    ) -> InjectableCompound:
        compound = self.repository.get_compound(compound_id)
        if compound is None or compound.user_id != user_id:
            raise EntityNotFoundError("injectable_compound", compound_id)
        return compound
