"""Boundary checks applied before anything is persisted."""

import math
from collections.abc import Collection

from health_tracker.errors import InvalidInputError


def require_number(
    field: str,
    value: float,
    *,
    minimum: float | None = 0.0,
    maximum: float | None = None,
    strictly_positive: bool = False,
) -> float:
    """Return ``value`` as a float or raise when it is not a usable number."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidInputError(field, "must be a number")
    if not math.isfinite(value):
        raise InvalidInputError(field, "must be finite")
    if strictly_positive and value <= 0:
        raise InvalidInputError(field, "must be greater than zero")
    if minimum is not None and value < minimum:
        raise InvalidInputError(field, f"must be at least {minimum:g}")
    if maximum is not None and value > maximum:
        raise InvalidInputError(field, f"must be at most {maximum:g}")
    return float(value)


def require_optional_number(
    field: str,
    value: float | None,
    *,
    minimum: float | None = 0.0,
    maximum: float | None = None,
    strictly_positive: bool = False,
) -> float | None:
    """Validate ``value`` when it is present."""
    if value is None:
        return None
    return require_number(
        field,
        value,
        minimum=minimum,
        maximum=maximum,
        strictly_positive=strictly_positive,
    )


def require_choice(field: str, value: str, choices: Collection[str]) -> str:
    """Raise unless ``value`` is one of ``choices``."""
    if value not in choices:
        allowed = ", ".join(sorted(choices))
        raise InvalidInputError(field, f"must be one of: {allowed}")
    return value


def require_text(field: str, value: str) -> str:
    """Raise on blank text and return it stripped."""
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise InvalidInputError(field, "must not be empty")
    return cleaned
