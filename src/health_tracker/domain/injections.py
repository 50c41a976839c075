"""Domain models for injectable compounds and doses."""

from dataclasses import dataclass
from datetime import date
from typing import Literal
from uuid import UUID

EsterType = Literal[
    "acetate", "propionate", "cypionate", "enanthate", "decanoate", "undecanoate"
]
CompoundCategory = Literal["trt", "hrt", "peptide", "other"]
InjectionSite = Literal[
    "left_delt",
    "right_delt",
    "left_glute",
    "right_glute",
    "left_quad",
    "right_quad",
    "subq_abdomen",
    "subq_thigh",
]

ESTER_TYPES: frozenset[str] = frozenset(
    {"acetate", "propionate", "cypionate", "enanthate", "decanoate", "undecanoate"}
)
COMPOUND_CATEGORIES: frozenset[str] = frozenset({"trt", "hrt", "peptide", "other"})
INJECTION_SITES: frozenset[str] = frozenset(
    {
        "left_delt",
        "right_delt",
        "left_glute",
        "right_glute",
        "left_quad",
        "right_quad",
        "subq_abdomen",
        "subq_thigh",
    }
)


@dataclass(frozen=True)
class InjectableCompound:
    """A compound in the user's catalog."""

    id: UUID
    user_id: UUID
    name: str
    concentration: float
    ester_type: EsterType
    half_life_days: float
    category: CompoundCategory
    weekly_target_mg: float
    notes: str | None = None


@dataclass(frozen=True)
class InjectionEntry:
    """A logged dose, joined with its compound's name and target."""

    id: UUID
    user_id: UUID
    compound_id: UUID
    dose_mg: float
    volume_ml: float
    injection_site: InjectionSite
    injection_date: date
    compound_name: str | None = None
    compound_weekly_target_mg: float = 0.0
    notes: str | None = None
