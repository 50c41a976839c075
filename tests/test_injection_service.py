"""Tests for compound catalog and injection logging."""

from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from health_tracker.domain.injections import InjectableCompound
from health_tracker.errors import EntityNotFoundError, InvalidInputError
from health_tracker.services.injections import InjectionService
from tests.conftest import TODAY


def _compound(
    service: InjectionService, user_id: UUID, **overrides: object
) -> InjectableCompound:
    values = {
        "name": "Test C",
        "concentration": 200.0,
        "ester_type": "cypionate",
        "half_life_days": 8.0,
        "category": "trt",
        "weekly_target_mg": 140.0,
    }
    values.update(overrides)
    return service.create_compound(user_id, **values)


def test_log_injection_joins_compound(
    injection_service: InjectionService, user_id
) -> None:
    compound = _compound(injection_service, user_id)

    injection = injection_service.log_injection(
        user_id, compound.id, 20.0, 0.1, "left_delt", TODAY
    )

    assert injection.compound_name == "Test C"
    assert injection.compound_weekly_target_mg == 140.0
    assert injection_service.list_injections(user_id) == [injection]


def test_log_injection_requires_own_compound(
    injection_service: InjectionService, user_id
) -> None:
    other_compound = _compound(injection_service, uuid4())

    with pytest.raises(EntityNotFoundError):
        injection_service.log_injection(
            user_id, other_compound.id, 20.0, 0.1, "left_delt", TODAY
        )
    with pytest.raises(EntityNotFoundError):
        injection_service.log_injection(user_id, uuid4(), 20.0, 0.1, "left_delt", TODAY)


def test_log_injection_validates(injection_service: InjectionService, user_id) -> None:
    compound = _compound(injection_service, user_id)

    with pytest.raises(InvalidInputError):
        injection_service.log_injection(
            user_id, compound.id, 0.0, 0.1, "left_delt", TODAY
        )
    with pytest.raises(InvalidInputError):
        injection_service.log_injection(user_id, compound.id, 20.0, 0.1, "ear", TODAY)


def test_list_injections_since(injection_service: InjectionService, user_id) -> None:
    compound = _compound(injection_service, user_id)
    for offset in (0, 5, 10):
        injection_service.log_injection(
            user_id,
            compound.id,
            20.0,
            0.1,
            "right_glute",
            TODAY - timedelta(days=offset),
        )

    recent = injection_service.list_injections(user_id, TODAY - timedelta(days=5))

    assert [item.injection_date for item in recent] == [
        TODAY - timedelta(days=5),
        TODAY,
    ]


def test_update_compound(injection_service: InjectionService, user_id) -> None:
    compound = _compound(injection_service, user_id)

    updated = injection_service.update_compound(
        user_id, compound.id, {"weekly_target_mg": 100.0}
    )

    assert updated.weekly_target_mg == 100.0
    assert updated.half_life_days == 8.0
    with pytest.raises(InvalidInputError):
        injection_service.update_compound(
            user_id, compound.id, {"ester_type": "mystery"}
        )
    with pytest.raises(EntityNotFoundError):
        injection_service.update_compound(user_id, uuid4(), {"notes": "x"})


def test_update_compound_changes_only_supplied_fields(
    injection_service: InjectionService, user_id
) -> None:
    compound = _compound(injection_service, user_id)

    updated = injection_service.update_compound(
        user_id, compound.id, {"concentration": 250.0}
    )

    assert updated.concentration == 250.0
    assert updated.half_life_days == 8.0
    assert updated.weekly_target_mg == 140.0
    assert injection_service.list_compounds(user_id) == [updated]


def test_delete_compound(injection_service: InjectionService, user_id) -> None:
    compound = _compound(injection_service, user_id)
    injection_service.delete_compound(user_id, compound.id)
    assert injection_service.list_compounds(user_id) == []


def test_compounds_and_injections_are_owned(
    injection_service: InjectionService, user_id
) -> None:
    compound = _compound(injection_service, user_id)
    injection = injection_service.log_injection(
        user_id, compound.id, 20.0, 0.1, "left_delt", TODAY
    )
    stranger = uuid4()

    with pytest.raises(EntityNotFoundError):
        injection_service.update_compound(stranger, compound.id, {"notes": "x"})
    with pytest.raises(EntityNotFoundError):
        injection_service.delete_compound(stranger, compound.id)
    with pytest.raises(EntityNotFoundError):
        injection_service.delete_injection(stranger, injection.id)

    assert injection_service.list_compounds(user_id) == [compound]
    injection_service.delete_injection(user_id, injection.id)
    assert injection_service.list_injections(user_id) == []
    with pytest.raises(EntityNotFoundError):
        injection_service.delete_injection(user_id, injection.id)
