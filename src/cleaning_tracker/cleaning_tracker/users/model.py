from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import to_datetime
from ..core.constants import DEFAULT_PAYMENT_RATE
from ..core.enums import Role


@dataclass(frozen=True)
class CleanerProfile:
    """Domain entity: a user profile keyed by the identity provider uid."""

    uid: str
    name: str
    email: str
    role: Role
    is_active: bool = True
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    assigned_machine_id: Optional[str] = None
    payment_rate: Optional[float] = None

    @property
    def effective_rate(self) -> float:
        return self.payment_rate or DEFAULT_PAYMENT_RATE

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "CleanerProfile":
        return cls(
            uid=doc["id"],
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            role=Role(doc.get("role", Role.CLEANER.value)),
            is_active=bool(doc.get("isActive", True)),
            created_at=to_datetime(doc.get("createdAt")),
            created_by=doc.get("createdBy"),
            assigned_machine_id=doc.get("assignedMachineId") or None,
            payment_rate=doc.get("paymentRate") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "createdBy": self.created_by,
            "assignedMachineId": self.assigned_machine_id,
            "paymentRate": self.payment_rate,
        }


@dataclass(frozen=True)
class CreateCleanerData:
    name: str
    email: str
    password: str
    confirm_password: str
    payment_rate: float
    assigned_machine_id: Optional[str] = None


@dataclass(frozen=True)
class CleanerMachineInfo:
    has_assignment: bool
    machine_id: Optional[str]
    machine_name: str
    payment_rate: float
    machine_location: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasAssignment": self.has_assignment,
            "machineId": self.machine_id,
            "machineName": self.machine_name,
            "paymentRate": self.payment_rate,
            "machineLocation": self.machine_location,
        }
