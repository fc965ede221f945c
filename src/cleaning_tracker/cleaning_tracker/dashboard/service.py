from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ..archive.service import ArchiveResetService
from ..cleanings.model import CleaningFilter
from ..cleanings.repository import CleaningRepository
from ..core.enums import Role
from ..identity.model import SessionUser
from ..rates.service import PaymentRateService
from ..stats.service import StatsService
from ..users.service import CleanerService


class DashboardService:
    """Read-model for the role-specific dashboards."""

    def __init__(
        self,
        cleanings: CleaningRepository,
        rates: PaymentRateService,
        archive: ArchiveResetService,
        stats: StatsService,
        cleaners: CleanerService,
    ):
        self._cleanings = cleanings
        self._rates = rates
        self._archive = archive
        self._stats = stats
        self._cleaners = cleaners

    def load(self, user: SessionUser) -> dict[str, Any]:
        if user.role.is_admin:
            return self.load_admin(user)
        return self.load_cleaner(user)

    def load_admin(self, user: SessionUser) -> dict[str, Any]:
        # Cleanings, rate and archive are independent reads; wait for all three.
        with ThreadPoolExecutor(max_workers=3) as pool:
            cleanings_f = pool.submit(self._cleanings.get_cleanings)
            rate_f = pool.submit(self._rates.get_payment_rate)
            archive_f = pool.submit(self._archive.get_archive_entries)
            cleanings = cleanings_f.result()
            rate = rate_f.result()
            archive = archive_f.result()

        return {
            "role": user.role.value,
            "canManageMachines": user.role == Role.SUPERIOR_ADMIN,
            "cleanings": [c.to_dict() for c in cleanings],
            "paymentRate": rate,
            "archive": [a.to_dict() for a in archive],
            "machineStats": [s.to_dict() for s in self._stats.get_machine_stats()],
            "cleanerStats": [s.to_dict() for s in self._stats.get_all_cleaner_stats()],
        }

    def load_cleaner(self, user: SessionUser) -> dict[str, Any]:
        cleanings = self._cleanings.get_cleanings(CleaningFilter(cleaner_id=user.uid))
        stats = self._stats.get_cleaner_stats(user.uid)
        return {
            "role": user.role.value,
            "cleanings": [c.to_dict() for c in cleanings],
            "machine": self._cleaners.get_cleaner_machine_info(user.uid).to_dict(),
            "stats": stats.to_dict() if stats else None,
        }
