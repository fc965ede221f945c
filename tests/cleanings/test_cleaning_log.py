from __future__ import annotations

from datetime import timedelta

from src.cleaning_tracker.cleaning_tracker.cleanings.model import CleaningData, CleaningFilter
from src.cleaning_tracker.cleaning_tracker.cleanings.repository import CleaningRepository
from src.cleaning_tracker.cleaning_tracker.core.constants import DEFAULT_MACHINE_LABEL
from src.cleaning_tracker.cleaning_tracker.core.enums import Role
from src.cleaning_tracker.cleaning_tracker.machines.model import CreateMachineData


def _add(repo, cleaner_id="c1", machine_id=None, rate=None):
    return repo.add_cleaning(
        CleaningData(
            cleaner_id=cleaner_id,
            cleaner_name=cleaner_id.upper(),
            machine="M",
            machine_id=machine_id,
            machine_name="M",
            payment_rate=rate,
        )
    )


def test_add_cleaning_stamps_timestamp_and_accepts_orphans(store):
    repo = CleaningRepository(store)
    cleaning_id = _add(repo, cleaner_id="ghost", machine_id="no-such-machine")

    (cleaning,) = repo.get_cleanings()
    assert cleaning.id == cleaning_id
    assert cleaning.machine_id == "no-such-machine"
    assert cleaning.timestamp is not None


def test_get_cleanings_newest_first_with_and_filters(store):
    repo = CleaningRepository(store)
    first = _add(repo, "c1", "m1")
    _add(repo, "c2", "m1")
    third = _add(repo, "c1", "m1")
    _add(repo, "c1", "m2")

    assert [c.id for c in repo.get_cleanings(CleaningFilter(machine_id="m1", cleaner_id="c1"))] == [third, first]
    assert len(repo.get_cleanings_by_machine("m2")) == 1
    assert len(repo.get_cleanings_by_cleaner("c2")) == 1


def test_date_range_is_applied_after_retrieval(store, fixed_now):
    repo = CleaningRepository(store)
    _add(repo)  # fixed_now + 1s
    second = _add(repo)  # fixed_now + 2s
    _add(repo)  # fixed_now + 3s

    window = CleaningFilter(
        start_date=fixed_now + timedelta(seconds=2),
        end_date=fixed_now + timedelta(seconds=2),
    )
    assert [c.id for c in repo.get_cleanings(window)] == [second]


def test_log_cleaning_snapshots_machine_and_rate(container):
    machine_id = container.machines_repo.create_machine(CreateMachineData(name="Kista", location="Mall"), "b").data
    container.users_repo.create_user_profile(
        uid="c1", email="c1@example.com", name="Cleo", role=Role.CLEANER, assigned_machine_id=machine_id, payment_rate=120
    )

    result = container.cleaning_service.log_cleaning("c1")
    container.users_repo.update_fields("c1", {"paymentRate": 200, "name": "Renamed"})

    assert result.success is True
    assert result.data.machine_location == "Mall"
    (cleaning,) = container.cleanings_repo.get_cleanings()
    assert cleaning.payment_rate == 120
    assert cleaning.cleaner_name == "Cleo"
    assert cleaning.machine == "Kista"
    assert cleaning.machine_name == "Kista"
    assert cleaning.machine_id == machine_id


def test_log_cleaning_without_assignment_uses_defaults(container):
    container.users_repo.create_user_profile(uid="c1", email="c1@example.com", name="Cleo", role=Role.CLEANER)

    container.cleaning_service.log_cleaning("c1")

    (cleaning,) = container.cleanings_repo.get_cleanings()
    assert cleaning.machine_id is None
    assert cleaning.machine == DEFAULT_MACHINE_LABEL
    assert cleaning.payment_rate == 100


def test_log_cleaning_rejects_unknown_cleaner(container):
    result = container.cleaning_service.log_cleaning("nobody")

    assert result.success is False
    assert container.cleanings_repo.get_cleanings() == []


def test_cleaners_only_list_their_own_cleanings(container):
    _add(container.cleanings_repo, "c1")
    _add(container.cleanings_repo, "c2")

    own = container.cleaning_service.list_cleanings(current_role=Role.CLEANER, current_uid="c1")
    everything = container.cleaning_service.list_cleanings(current_role=Role.ADMIN, current_uid="a")

    assert {c.cleaner_id for c in own} == {"c1"}
    assert len(everything) == 2
