from __future__ import annotations

import pytest

from src.cleaning_tracker.cleaning_tracker.core.constants import MACHINES_COLLECTION
from src.cleaning_tracker.cleaning_tracker.core.enums import Role
from src.cleaning_tracker.cleaning_tracker.core.exceptions import AuthorizationError
from src.cleaning_tracker.cleaning_tracker.machines.model import CreateMachineData
from src.cleaning_tracker.cleaning_tracker.machines.repository import MachineRepository


def test_duplicate_machine_name_is_rejected_without_second_insert(store):
    repo = MachineRepository(store)

    first = repo.create_machine(CreateMachineData(name="Uppsala #1", location="Gränby", city="Uppsala"), "boss")
    second = repo.create_machine(CreateMachineData(name="Uppsala #1"), "boss")

    assert first.success is True
    assert second.success is False
    assert second.message == "Machine with this name already exists"
    assert [m.name for m in repo.get_machines()].count("Uppsala #1") == 1


def test_machine_name_match_is_case_sensitive(store):
    repo = MachineRepository(store)
    repo.create_machine(CreateMachineData(name="Uppsala #1"), "boss")

    assert repo.create_machine(CreateMachineData(name="uppsala #1"), "boss").success is True


def test_new_machine_is_active_and_records_creator(store):
    repo = MachineRepository(store)
    machine_id = repo.create_machine(CreateMachineData(name="Kista", city="Stockholm"), "boss").data

    machine = repo.get_machine(machine_id)
    assert machine.is_active is True
    assert machine.created_by == "boss"
    assert machine.created_at is not None
    assert repo.get_machine("missing") is None


def test_get_machines_newest_first(store):
    repo = MachineRepository(store)
    for name in ("A", "B", "C"):
        repo.create_machine(CreateMachineData(name=name), "boss")

    assert [m.name for m in repo.get_machines()] == ["C", "B", "A"]


def test_toggle_status_does_not_touch_assigned_cleaners(container):
    machine_id = container.machines_repo.create_machine(CreateMachineData(name="A"), "boss").data
    container.users_repo.create_user_profile(
        uid="c1", email="c1@example.com", name="C1", role=Role.CLEANER, assigned_machine_id=machine_id
    )

    container.machines_repo.toggle_machine_status(machine_id, False)

    assert container.machines_repo.get_machine(machine_id).is_active is False
    assert container.users_repo.get_user_profile("c1").assigned_machine_id == machine_id


def test_only_superior_admin_manages_machines(container):
    with pytest.raises(AuthorizationError):
        container.machine_service.create_machine(current_role=Role.ADMIN, created_by="a", name="X")


def test_blank_machine_name_is_a_validation_result(container):
    result = container.machine_service.create_machine(current_role=Role.SUPERIOR_ADMIN, created_by="b", name="  ")

    assert result.success is False
    assert container.store.count(MACHINES_COLLECTION) == 0


def test_update_machine_rejects_name_clash(container):
    svc = container.machine_service
    a = svc.create_machine(current_role=Role.SUPERIOR_ADMIN, created_by="b", name="A").data
    svc.create_machine(current_role=Role.SUPERIOR_ADMIN, created_by="b", name="B")

    clash = svc.update_machine(a, {"name": "B"}, current_role=Role.SUPERIOR_ADMIN)
    ok = svc.update_machine(a, {"location": "Centrum"}, current_role=Role.SUPERIOR_ADMIN)

    assert clash.success is False
    assert ok.success is True
    assert svc.get_machine(a).location == "Centrum"
    assert svc.get_machine(a).updated_at is not None


def test_toggle_unknown_machine_reports_failure(container):
    result = container.machine_service.toggle_machine_status("missing", True, current_role=Role.SUPERIOR_ADMIN)

    assert result.success is False
