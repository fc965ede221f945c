from __future__ import annotations

import uuid
from typing import Optional, Sequence

import structlog

from ..cleanings.model import Cleaning, CleaningFilter
from ..cleanings.repository import CleaningRepository
from ..common.datetime_utils import now_utc
from ..common.validators import rate_error, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.result import ActionResult
from ..payroll.calculator.base import PayoutCalculator
from ..payroll.calculator.standard_calculator import StandardPayoutCalculator
from .model import ArchiveEntry, ResetOutcome
from .repository import ArchiveRepository

log = structlog.get_logger(__name__)


class ArchiveResetService:
    """Use case: settle outstanding cleanings into one payment-history entry.

    The store has no multi-document transaction, so the reset uses a marker:
    selected cleanings are tagged with the new entry id before the entry is
    written, and deleted after. A later reset finishes whatever a failed one
    left behind: tagged cleanings whose entry exists are deleted, tagged
    cleanings whose entry was never written are released.
    """

    def __init__(
        self,
        cleanings: CleaningRepository,
        archive: ArchiveRepository,
        *,
        calculator: Optional[PayoutCalculator] = None,
    ):
        self._cleanings = cleanings
        self._archive = archive
        self._calculator = calculator or StandardPayoutCalculator()

    def get_archive_entries(self, machine_id: Optional[str] = None) -> Sequence[ArchiveEntry]:
        return self._archive.get_archive_entries(machine_id)

    def recover_pending(self) -> int:
        """Finish or release cleanings tagged by an interrupted reset. Returns how many were touched."""
        pending = [c for c in self._cleanings.get_cleanings() if c.archive_entry_id]
        if not pending:
            return 0

        known: dict[str, bool] = {}
        for c in pending:
            entry_id = c.archive_entry_id
            if entry_id not in known:
                known[entry_id] = self._archive.get_archive_entry(entry_id) is not None

            if known[entry_id]:
                self._cleanings.delete_cleaning(c.id)
            else:
                self._cleanings.mark_archived(c.id, None)

        log.warning("reset_recovered_pending", count=len(pending), entries=sorted(known))
        return len(pending)

    def archive_and_reset_cleanings(
        self,
        *,
        current_role: Role,
        paid_by: str,
        rate_per_cleaning: Optional[float] = None,
        machine_id: Optional[str] = None,
    ) -> ActionResult:
        """Archive outstanding cleanings and clear them from the log.

        ``data`` carries the ``ResetOutcome``. Cleanings that could not be
        deleted after the entry was written are counted in
        ``pending_deletes``; the payment itself is archived.
        """
        if not current_role.is_admin:
            raise AuthorizationError("You do not have permission")
        try:
            paid_by = require_non_empty(paid_by, "Paid by")
        except ValidationError as e:
            return ActionResult.fail(str(e))
        if rate_per_cleaning is not None:
            error = rate_error(rate_per_cleaning)
            if error:
                return ActionResult.fail(error)

        recovered = self.recover_pending()

        logs = [
            c
            for c in self._cleanings.get_cleanings(CleaningFilter(machine_id=machine_id or None))
            if not c.archive_entry_id
        ]
        if not logs:
            return ActionResult.ok("No cleanings to archive", ResetOutcome(archived=False, recovered=recovered))

        total_amount = self._calculator.total(logs, rate_per_cleaning)
        entry_id = uuid.uuid4().hex[:20]

        for c in logs:
            self._cleanings.mark_archived(c.id, entry_id)

        # The entry must be durable before anything is deleted.
        self._archive.add_archive_entry(
            ArchiveEntry(
                id=entry_id,
                paid_by=paid_by,
                timestamp=now_utc(),
                logs=[c.to_dict() for c in logs],
                total_amount=total_amount,
                machine_id=machine_id or None,
            )
        )
        log.info(
            "reset_archived",
            entry_id=entry_id,
            paid_by=paid_by,
            machine_id=machine_id,
            count=len(logs),
            total_amount=total_amount,
        )

        failed = self._delete_all(logs)
        outcome = ResetOutcome(
            archived=True,
            entry_id=entry_id,
            total_amount=total_amount,
            cleaning_count=len(logs),
            cleaner_names=sorted({c.cleaner_name for c in logs if c.cleaner_name}),
            recovered=recovered,
            pending_deletes=len(failed),
        )

        message = f"Payment of {total_amount:g} SEK archived"
        if failed:
            log.error("reset_delete_incomplete", entry_id=entry_id, failed=failed)
            message += (
                f", but {len(failed)} cleaning(s) could not be removed; "
                "they will be cleared on the next reset"
            )
        return ActionResult.ok(message, outcome)

    def _delete_all(self, logs: Sequence[Cleaning]) -> list[str]:
        failed: list[str] = []
        for c in logs:
            try:
                self._cleanings.delete_cleaning(c.id)
            except Exception as e:
                log.warning("reset_delete_failed", cleaning_id=c.id, error=str(e))
                failed.append(c.id)
        return failed
