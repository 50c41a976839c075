"""Tests for Nirvana session logging."""

from datetime import timedelta

import pytest

from health_tracker.errors import InvalidInputError
from health_tracker.services.nirvana import NirvanaService
from tests.conftest import TODAY


def test_log_and_list_sessions(nirvana_service: NirvanaService, user_id) -> None:
    nirvana_service.log_session(
        user_id,
        TODAY - timedelta(days=10),
        "mobility",
        30,
        "beginner",
        3,
    )
    session = nirvana_service.log_session(
        user_id,
        TODAY,
        "handstand",
        45,
        "intermediate",
        4,
        exercises=["wall walk"],
        body_parts=["shoulders"],
    )

    recent = nirvana_service.list_sessions(user_id, TODAY - timedelta(days=7))

    assert recent == [session]
    assert session.quality_rating == 4
    assert session.exercises == ["wall walk"]


@pytest.mark.parametrize("quality", [0, 6])
def test_quality_out_of_range(
    nirvana_service: NirvanaService, user_id, quality: int
) -> None:
    with pytest.raises(InvalidInputError):
        nirvana_service.log_session(
            user_id, TODAY, "mobility", 30, "beginner", quality
        )


def test_unknown_difficulty(nirvana_service: NirvanaService, user_id) -> None:
    with pytest.raises(InvalidInputError):
        nirvana_service.log_session(user_id, TODAY, "mobility", 30, "expert", 3)
