from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

import structlog

from ..core.constants import DEFAULT_MACHINE_LABEL
from ..core.enums import Role
from ..core.result import ActionResult
from ..machines.repository import MachineRepository
from ..users.repository import UserRepository
from .model import Cleaning, CleaningData, CleaningFilter
from .repository import CleaningRepository

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LoggedCleaning:
    cleaning_id: str
    cleaner_name: str
    machine_id: Optional[str]
    machine_name: str
    machine_location: str
    payment_rate: float


class CleaningService:
    def __init__(self, cleanings: CleaningRepository, users: UserRepository, machines: MachineRepository):
        self._cleanings = cleanings
        self._users = users
        self._machines = machines

    def log_cleaning(self, cleaner_id: str, cleaner_name: Optional[str] = None) -> ActionResult:
        """Record a cleaning for the cleaner's current machine at the cleaner's current rate.

        Unlike ``CleaningRepository.add_cleaning``, this rejects unknown cleaners.
        """
        profile = self._users.get_user_profile(cleaner_id)
        if not profile:
            return ActionResult.fail("Cleaner profile not found")
        if not profile.is_active:
            return ActionResult.fail("Cleaner account is deactivated")

        machine_id = profile.assigned_machine_id
        machine_name = DEFAULT_MACHINE_LABEL
        machine_location = "Unknown Location"
        if machine_id:
            machine = self._machines.get_machine(machine_id)
            if machine:
                machine_name = machine.name
                machine_location = machine.location or machine_location

        name = cleaner_name or profile.name
        rate = profile.effective_rate
        cleaning_id = self._cleanings.add_cleaning(
            CleaningData(
                cleaner_id=cleaner_id,
                cleaner_name=name,
                machine=machine_name,
                machine_id=machine_id,
                machine_name=machine_name,
                payment_rate=rate,
            )
        )
        log.info("cleaning_logged", cleaning_id=cleaning_id, cleaner_id=cleaner_id, machine_id=machine_id, rate=rate)

        return ActionResult.ok(
            "Cleaning logged successfully",
            LoggedCleaning(
                cleaning_id=cleaning_id,
                cleaner_name=name,
                machine_id=machine_id,
                machine_name=machine_name,
                machine_location=machine_location,
                payment_rate=rate,
            ),
        )

    def list_cleanings(
        self,
        *,
        current_role: Role,
        current_uid: str,
        filter: Optional[CleaningFilter] = None,
    ) -> Sequence[Cleaning]:
        """Admins see every cleaning; cleaners only their own."""
        filter = filter or CleaningFilter()
        if not current_role.is_admin:
            filter = replace(filter, cleaner_id=current_uid)
        return self._cleanings.get_cleanings(filter)
