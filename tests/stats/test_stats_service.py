from __future__ import annotations

from datetime import datetime, timezone

from src.cleaning_tracker.cleaning_tracker.cleanings.model import Cleaning
from src.cleaning_tracker.cleaning_tracker.core.enums import Role
from src.cleaning_tracker.cleaning_tracker.machines.model import CreateMachineData, Machine
from src.cleaning_tracker.cleaning_tracker.stats.service import (
    compute_all_cleaner_stats,
    compute_cleaner_stats,
    compute_machine_stats,
)
from src.cleaning_tracker.cleaning_tracker.users.model import CleanerProfile


def _cleaning(i, *, cleaner_id="c1", machine="Kista", machine_id=None, rate=None, day=1):
    return Cleaning(
        id=f"x{i}",
        cleaner_id=cleaner_id,
        cleaner_name=cleaner_id,
        machine=machine,
        machine_id=machine_id,
        payment_rate=rate,
        timestamp=datetime(2026, 1, day, tzinfo=timezone.utc),
    )


def _cleaner(uid="c1", machine_id=None, rate=None):
    return CleanerProfile(uid=uid, name=uid.upper(), email=f"{uid}@example.com", role=Role.CLEANER,
                          assigned_machine_id=machine_id, payment_rate=rate)


def test_machine_stats_match_by_id_then_legacy_name():
    kista = Machine(id="m1", name="Kista")
    solna = Machine(id="m2", name="Solna")
    cleanings = [
        _cleaning(1, machine_id="m1", rate=120, day=3),
        _cleaning(2, machine="Kista", day=5, cleaner_id="c2"),  # legacy, name only
        _cleaning(3, machine="Kista", machine_id="m2", day=7),  # id wins over the name
        _cleaning(4, machine="Gone", day=9),
    ]

    by_id = {s.machine_id: s for s in compute_machine_stats([kista, solna], cleanings)}

    assert by_id["m1"].total_cleanings == 2
    assert by_id["m1"].total_earnings == 220
    assert by_id["m1"].last_cleaning == datetime(2026, 1, 5, tzinfo=timezone.utc)
    assert by_id["m1"].assigned_cleaners == ["c1", "c2"]
    assert by_id["m2"].total_cleanings == 1
    assert sum(s.total_cleanings for s in by_id.values()) == 3


def test_machine_without_cleanings_has_no_last_cleaning():
    (stats,) = compute_machine_stats([Machine(id="m1", name="Kista")], [])

    assert stats.total_cleanings == 0
    assert stats.total_earnings == 0
    assert stats.last_cleaning is None


def test_cleaner_stats_fall_back_to_profile_rate():
    cleaner = _cleaner(machine_id="m1", rate=150)
    cleanings = [_cleaning(1, rate=120), _cleaning(2), _cleaning(3, cleaner_id="other", rate=999)]

    stats = compute_cleaner_stats(cleaner, cleanings, {"m1": Machine(id="m1", name="Kista")}.get)

    assert stats.total_cleanings == 2
    assert stats.total_earnings == 270
    assert stats.payment_rate == 150
    assert stats.machine_name == "Kista"


def test_cleaner_stats_machine_labels():
    lookup = {}.get

    assert compute_cleaner_stats(_cleaner(), [], lookup).machine_name == "No Machine Assigned"
    assert compute_cleaner_stats(_cleaner(machine_id="gone"), [], lookup).machine_name == "Unknown Machine"
    assert compute_cleaner_stats(_cleaner(), [], lookup).payment_rate == 100


def test_failed_cleaner_gets_placeholder_without_hiding_others():
    def lookup(machine_id):
        if machine_id == "broken":
            raise RuntimeError("lookup failed")
        return None

    stats = compute_all_cleaner_stats(
        [_cleaner("c1", machine_id="broken"), _cleaner("c2")],
        [_cleaning(1, cleaner_id="c1"), _cleaning(2, cleaner_id="c2")],
        lookup,
    )

    assert [s.cleaner_id for s in stats] == ["c1", "c2"]
    assert stats[0].degraded is True
    assert stats[0].total_cleanings == 0
    assert stats[0].machine_name == "Unavailable"
    assert stats[1].degraded is False
    assert stats[1].total_cleanings == 1


def test_stats_service_reads_live_data(container):
    machine_id = container.machines_repo.create_machine(CreateMachineData(name="Kista"), "boss").data
    container.users_repo.create_user_profile(
        uid="c1", email="c1@example.com", name="Cleo", role=Role.CLEANER, assigned_machine_id=machine_id
    )
    container.cleaning_service.log_cleaning("c1")
    container.cleaning_service.log_cleaning("c1")

    (machine_stats,) = container.stats_service.get_machine_stats()
    (cleaner_stats,) = container.stats_service.get_all_cleaner_stats()

    assert machine_stats.total_cleanings == 2
    assert machine_stats.total_earnings == 200
    assert cleaner_stats.machine_name == "Kista"
    assert container.stats_service.get_cleaner_stats("c1").total_cleanings == 2
    assert container.stats_service.get_cleaner_stats("missing") is None
