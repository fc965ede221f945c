from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.result import ActionResult
from .model import CreateMachineData, Machine
from .repository import MachineRepository

EDITABLE_FIELDS = ("name", "location", "city")


class MachineService:
    """Use case: machine management (superior admin only for writes)."""

    def __init__(self, machines: MachineRepository):
        self._machines = machines

    @staticmethod
    def _require_superior(current_role: Role) -> None:
        if current_role != Role.SUPERIOR_ADMIN:
            raise AuthorizationError("Only the superior admin can manage machines")

    def list_machines(self, *, active_only: bool = False) -> Sequence[Machine]:
        machines = self._machines.get_machines()
        return [m for m in machines if m.is_active] if active_only else machines

    def get_machine(self, machine_id: str) -> Optional[Machine]:
        return self._machines.get_machine(machine_id)

    def create_machine(
        self,
        *,
        current_role: Role,
        created_by: str,
        name: str,
        location: str = "",
        city: str = "",
    ) -> ActionResult:
        self._require_superior(current_role)
        try:
            name = require_non_empty(name, "Machine name")
        except ValidationError as e:
            return ActionResult.fail(str(e))

        return self._machines.create_machine(
            CreateMachineData(name=name, location=(location or "").strip(), city=(city or "").strip()),
            created_by,
        )

    def update_machine(self, machine_id: str, updates: dict[str, Any], *, current_role: Role) -> ActionResult:
        self._require_superior(current_role)
        clean = {k: (v or "").strip() for k, v in updates.items() if k in EDITABLE_FIELDS}
        if not clean:
            return ActionResult.fail("Nothing to update")
        if "name" in clean:
            if not clean["name"]:
                return ActionResult.fail("Machine name is required")
            clash = [m for m in self._machines.get_machines() if m.name == clean["name"] and m.id != machine_id]
            if clash:
                return ActionResult.fail("Machine with this name already exists")

        try:
            self._machines.update_machine(machine_id, clean)
        except NotFoundError:
            return ActionResult.fail("Machine does not exist")
        return ActionResult.ok("Machine updated successfully")

    def toggle_machine_status(self, machine_id: str, is_active: bool, *, current_role: Role) -> ActionResult:
        self._require_superior(current_role)
        try:
            self._machines.toggle_machine_status(machine_id, is_active)
        except NotFoundError:
            return ActionResult.fail("Machine does not exist")
        return ActionResult.ok(f"Machine {'activated' if is_active else 'deactivated'} successfully")
