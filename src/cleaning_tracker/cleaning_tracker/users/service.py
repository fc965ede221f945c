from __future__ import annotations

from typing import Any, Optional, Sequence

import structlog

from ..common.validators import rate_error, require_min_length, require_non_empty
from ..core.constants import DEFAULT_PAYMENT_RATE, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.result import ActionResult
from ..identity.provider import IdentityError, IdentityProvider
from ..machines.repository import MachineRepository
from .model import CleanerMachineInfo, CleanerProfile, CreateCleanerData
from .repository import UserRepository

log = structlog.get_logger(__name__)

IDENTITY_MESSAGES = {
    "auth/email-already-in-use": "Email is already in use",
    "auth/weak-password": "Password is too weak",
    "auth/invalid-email": "Invalid email address",
}


class CleanerService:
    """Use case: manage cleaner accounts, machine assignments and rates (admins)."""

    def __init__(self, users: UserRepository, machines: MachineRepository, identity: IdentityProvider):
        self._users = users
        self._machines = machines
        self._identity = identity

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if not current_role.is_admin:
            raise AuthorizationError("You do not have permission")

    def _machine_assignment_error(self, machine_id: Optional[str]) -> Optional[str]:
        if not machine_id:
            return None
        machine = self._machines.get_machine(machine_id)
        if not machine:
            return "Selected machine does not exist"
        if not machine.is_active:
            return "Cannot assign cleaner to inactive machine"
        return None

    def list_cleaners(self) -> Sequence[CleanerProfile]:
        return self._users.get_all_cleaners()

    def get_cleaners_by_machine(self, machine_id: str) -> Sequence[CleanerProfile]:
        return self._users.get_cleaners_by_machine(machine_id)

    def create_cleaner(self, data: CreateCleanerData, *, created_by: str, current_role: Role) -> ActionResult:
        self._require_admin(current_role)

        try:
            name = require_non_empty(data.name, "Name")
            require_non_empty(data.email, "Email")
            require_min_length(data.password, "Password", MIN_PASSWORD_LENGTH)
        except ValidationError as e:
            return ActionResult.fail(str(e))
        if data.password != data.confirm_password:
            return ActionResult.fail("Passwords do not match")

        error = self._machine_assignment_error(data.assigned_machine_id) or rate_error(data.payment_rate)
        if error:
            return ActionResult.fail(error)

        try:
            principal = self._identity.create_account(data.email, data.password)
        except IdentityError as e:
            return ActionResult.fail(IDENTITY_MESSAGES.get(e.code, "Failed to create cleaner"))

        self._users.create_user_profile(
            uid=principal.uid,
            email=principal.email,
            name=name,
            role=Role.CLEANER,
            created_by=created_by,
            assigned_machine_id=data.assigned_machine_id,
            payment_rate=data.payment_rate,
        )
        log.info("cleaner_created", uid=principal.uid, machine_id=data.assigned_machine_id, created_by=created_by)
        return ActionResult.ok("Cleaner created successfully", principal.uid)

    def update_cleaner_status(self, uid: str, is_active: bool, *, current_role: Role) -> ActionResult:
        self._require_admin(current_role)
        self._users.update_cleaner_status(uid, is_active)
        return ActionResult.ok(f"Cleaner {'activated' if is_active else 'deactivated'} successfully")

    def update_cleaner_machine_assignment(
        self,
        uid: str,
        assigned_machine_id: Optional[str],
        payment_rate: Optional[float] = None,
        *,
        current_role: Role,
    ) -> ActionResult:
        self._require_admin(current_role)

        error = self._machine_assignment_error(assigned_machine_id)
        if error:
            return ActionResult.fail(error)

        updates: dict[str, Any] = {"assignedMachineId": assigned_machine_id or None}
        if payment_rate is not None:
            error = rate_error(payment_rate)
            if error:
                return ActionResult.fail(error)
            updates["paymentRate"] = payment_rate

        self._users.update_fields(uid, updates)
        return ActionResult.ok("Cleaner assignment updated successfully")

    def update_cleaner_payment_rate(self, uid: str, payment_rate: float, *, current_role: Role) -> ActionResult:
        self._require_admin(current_role)

        error = rate_error(payment_rate)
        if error:
            return ActionResult.fail(error)

        self._users.update_fields(uid, {"paymentRate": payment_rate})
        return ActionResult.ok("Payment rate updated successfully")

    def get_cleaner_machine_info(self, cleaner_id: str) -> CleanerMachineInfo:
        """Current assignment summary.

        A machine deactivated after assignment is still reported by name.
        """
        profile = self._users.get_user_profile(cleaner_id)
        if not profile or not profile.assigned_machine_id:
            return CleanerMachineInfo(
                has_assignment=False,
                machine_id=None,
                machine_name="No machine assigned",
                payment_rate=DEFAULT_PAYMENT_RATE,
            )

        machine = self._machines.get_machine(profile.assigned_machine_id)
        return CleanerMachineInfo(
            has_assignment=True,
            machine_id=profile.assigned_machine_id,
            machine_name=machine.name if machine else "Unknown Machine",
            payment_rate=profile.effective_rate,
            machine_location=machine.location if machine else "Unknown Location",
        )

    def ensure_privileged_user(self, *, email: str, password: str, name: str, role: Role) -> bool:
        """Create an admin account and profile unless the email is taken. Returns True when created."""
        try:
            principal = self._identity.create_account(email, password, display_name=name)
        except IdentityError as e:
            if e.code == "auth/email-already-in-use":
                log.info("privileged_user_exists", email=email)
                return False
            raise

        self._users.create_user_profile(uid=principal.uid, email=principal.email, name=name, role=role)
        log.info("privileged_user_created", email=email, role=role.value)
        return True
