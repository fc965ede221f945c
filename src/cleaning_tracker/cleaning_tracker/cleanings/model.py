from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import to_datetime


@dataclass(frozen=True)
class CleaningData:
    """Fields captured when a cleaning is logged.

    ``cleaner_name``, ``machine_name`` and ``payment_rate`` are snapshots taken
    at logging time and are never re-synced with the live profile.
    """

    cleaner_id: str
    cleaner_name: str
    machine: str
    machine_id: Optional[str] = None
    machine_name: Optional[str] = None
    payment_rate: Optional[float] = None

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "cleanerId": self.cleaner_id,
            "cleanerName": self.cleaner_name,
            "machine": self.machine,
        }
        if self.machine_id is not None:
            doc["machineId"] = self.machine_id
        if self.machine_name is not None:
            doc["machineName"] = self.machine_name
        if self.payment_rate is not None:
            doc["paymentRate"] = self.payment_rate
        return doc


@dataclass(frozen=True)
class Cleaning:
    """Domain entity: one logged cleaning."""

    id: str
    cleaner_id: str
    cleaner_name: str
    machine: str
    timestamp: Optional[datetime]
    machine_id: Optional[str] = None
    machine_name: Optional[str] = None
    payment_rate: Optional[float] = None
    archive_entry_id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Cleaning":
        return cls(
            id=doc["id"],
            cleaner_id=doc.get("cleanerId", ""),
            cleaner_name=doc.get("cleanerName", ""),
            machine=doc.get("machine") or "",
            timestamp=to_datetime(doc.get("timestamp")),
            machine_id=doc.get("machineId") or None,
            machine_name=doc.get("machineName"),
            payment_rate=doc.get("paymentRate"),
            archive_entry_id=doc.get("archiveEntryId") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Snapshot used in API payloads and embedded archive logs."""
        return {
            "id": self.id,
            "cleanerId": self.cleaner_id,
            "cleanerName": self.cleaner_name,
            "machine": self.machine,
            "machineId": self.machine_id,
            "machineName": self.machine_name,
            "paymentRate": self.payment_rate,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


@dataclass(frozen=True)
class CleaningFilter:
    machine_id: Optional[str] = None
    cleaner_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
