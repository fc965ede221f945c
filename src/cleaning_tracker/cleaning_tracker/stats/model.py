from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class MachineStats:
    machine_id: str
    machine_name: str
    total_cleanings: int
    total_earnings: float
    last_cleaning: Optional[datetime] = None
    assigned_cleaners: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "machineId": self.machine_id,
            "machineName": self.machine_name,
            "totalCleanings": self.total_cleanings,
            "totalEarnings": self.total_earnings,
            "lastCleaning": self.last_cleaning.isoformat() if self.last_cleaning else None,
            "assignedCleaners": self.assigned_cleaners,
        }


@dataclass(frozen=True)
class CleanerStats:
    cleaner_id: str
    cleaner_name: str
    machine_id: Optional[str]
    machine_name: str
    total_cleanings: int
    total_earnings: float
    payment_rate: float
    degraded: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "cleanerId": self.cleaner_id,
            "cleanerName": self.cleaner_name,
            "machineId": self.machine_id,
            "machineName": self.machine_name,
            "totalCleanings": self.total_cleanings,
            "totalEarnings": self.total_earnings,
            "paymentRate": self.payment_rate,
            "degraded": self.degraded,
        }
