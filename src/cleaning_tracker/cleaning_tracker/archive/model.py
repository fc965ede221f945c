from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import to_datetime


@dataclass(frozen=True)
class ArchiveEntry:
    """Immutable payment-history record: who paid, how much, and a full copy of the logs."""

    paid_by: str
    timestamp: Optional[datetime]
    logs: list[dict[str, Any]]
    total_amount: float
    machine_id: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "ArchiveEntry":
        return cls(
            id=doc.get("id"),
            paid_by=doc.get("paidBy", ""),
            timestamp=to_datetime(doc.get("timestamp")),
            logs=list(doc.get("logs") or []),
            total_amount=doc.get("totalAmount", 0),
            machine_id=doc.get("machineId") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "paidBy": self.paid_by,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "logs": self.logs,
            "totalAmount": self.total_amount,
            "machineId": self.machine_id,
        }


@dataclass(frozen=True)
class ResetOutcome:
    archived: bool
    entry_id: Optional[str] = None
    total_amount: float = 0
    cleaning_count: int = 0
    cleaner_names: list[str] = field(default_factory=list)
    recovered: int = 0
    pending_deletes: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "archived": self.archived,
            "entryId": self.entry_id,
            "totalAmount": self.total_amount,
            "cleaningCount": self.cleaning_count,
            "cleanerNames": self.cleaner_names,
            "pendingDeletes": self.pending_deletes,
        }
