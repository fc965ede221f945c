"""Statistics over machines, cleanings and cleaner profiles.

The ``compute_*`` functions are pure: they work on collections that were
already fetched and never write. ``StatsService`` does the fetching.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

import structlog

from ..cleanings.model import Cleaning
from ..cleanings.repository import CleaningRepository
from ..machines.model import Machine
from ..machines.repository import MachineRepository
from ..payroll.calculator.base import PayoutCalculator
from ..payroll.calculator.standard_calculator import StandardPayoutCalculator
from ..users.model import CleanerProfile
from ..users.repository import UserRepository
from .model import CleanerStats, MachineStats

log = structlog.get_logger(__name__)

MachineLookup = Callable[[str], Optional[Machine]]

NO_MACHINE_ASSIGNED = "No Machine Assigned"
UNKNOWN_MACHINE = "Unknown Machine"


def _belongs_to(cleaning: Cleaning, machine: Machine) -> bool:
    if cleaning.machine_id:
        return cleaning.machine_id == machine.id
    # Legacy records only carry the display name.
    return cleaning.machine == machine.name


def compute_machine_stats(
    machines: Iterable[Machine],
    cleanings: Sequence[Cleaning],
    *,
    calculator: Optional[PayoutCalculator] = None,
) -> list[MachineStats]:
    calculator = calculator or StandardPayoutCalculator()
    out: list[MachineStats] = []
    for machine in machines:
        part = [c for c in cleanings if _belongs_to(c, machine)]
        stamps = [c.timestamp for c in part if c.timestamp is not None]

        cleaners: list[str] = []
        for c in part:
            if c.cleaner_id not in cleaners:
                cleaners.append(c.cleaner_id)

        out.append(
            MachineStats(
                machine_id=machine.id,
                machine_name=machine.name,
                total_cleanings=len(part),
                total_earnings=calculator.total(part),
                last_cleaning=max(stamps) if stamps else None,
                assigned_cleaners=cleaners,
            )
        )
    return out


def compute_cleaner_stats(
    cleaner: CleanerProfile,
    cleanings: Iterable[Cleaning],
    machine_lookup: MachineLookup,
    *,
    calculator: Optional[PayoutCalculator] = None,
) -> CleanerStats:
    """Stats for one cleaner.

    The machine reported is the cleaner's current assignment, not the
    machines recorded on past cleanings.
    """
    calculator = calculator or StandardPayoutCalculator()
    own = [c for c in cleanings if c.cleaner_id == cleaner.uid]

    machine_name = NO_MACHINE_ASSIGNED
    if cleaner.assigned_machine_id:
        machine = machine_lookup(cleaner.assigned_machine_id)
        machine_name = machine.name if machine else UNKNOWN_MACHINE

    return CleanerStats(
        cleaner_id=cleaner.uid,
        cleaner_name=cleaner.name,
        machine_id=cleaner.assigned_machine_id,
        machine_name=machine_name,
        total_cleanings=len(own),
        total_earnings=calculator.total(own, cleaner.payment_rate),
        payment_rate=cleaner.effective_rate,
    )


def placeholder_cleaner_stats(cleaner: CleanerProfile) -> CleanerStats:
    return CleanerStats(
        cleaner_id=cleaner.uid,
        cleaner_name=cleaner.name,
        machine_id=cleaner.assigned_machine_id,
        machine_name="Unavailable" if cleaner.assigned_machine_id else "No Machine",
        total_cleanings=0,
        total_earnings=0,
        payment_rate=cleaner.effective_rate,
        degraded=True,
    )


def compute_all_cleaner_stats(
    cleaners: Iterable[CleanerProfile],
    cleanings: Sequence[Cleaning],
    machine_lookup: MachineLookup,
    *,
    calculator: Optional[PayoutCalculator] = None,
) -> list[CleanerStats]:
    """Per-cleaner stats; a cleaner whose computation fails gets a zeroed placeholder."""
    out: list[CleanerStats] = []
    for cleaner in cleaners:
        try:
            out.append(compute_cleaner_stats(cleaner, cleanings, machine_lookup, calculator=calculator))
        except Exception as e:
            log.warning("cleaner_stats_degraded", cleaner_id=cleaner.uid, error=str(e))
            out.append(placeholder_cleaner_stats(cleaner))
    return out


class StatsService:
    def __init__(
        self,
        machines: MachineRepository,
        cleanings: CleaningRepository,
        users: UserRepository,
        *,
        calculator: Optional[PayoutCalculator] = None,
    ):
        self._machines = machines
        self._cleanings = cleanings
        self._users = users
        self._calculator = calculator or StandardPayoutCalculator()

    def get_machine_stats(self) -> list[MachineStats]:
        machines = self._machines.get_machines()
        cleanings = self._cleanings.get_cleanings()
        return compute_machine_stats(machines, cleanings, calculator=self._calculator)

    def get_cleaner_stats(self, cleaner_id: str) -> Optional[CleanerStats]:
        cleaner = self._users.get_user_profile(cleaner_id)
        if not cleaner:
            return None
        cleanings = self._cleanings.get_cleanings_by_cleaner(cleaner_id)
        return compute_cleaner_stats(cleaner, cleanings, self._machines.get_machine, calculator=self._calculator)

    def get_all_cleaner_stats(self) -> list[CleanerStats]:
        cleaners = self._users.get_all_cleaners()
        cleanings = self._cleanings.get_cleanings()
        by_id = {m.id: m for m in self._machines.get_machines()}
        return compute_all_cleaner_stats(cleaners, cleanings, by_id.get, calculator=self._calculator)
