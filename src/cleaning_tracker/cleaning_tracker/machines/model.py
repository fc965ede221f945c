from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import to_datetime


@dataclass(frozen=True)
class Machine:
    """Domain entity: a candy machine that cleaners service.

    Machines are never hard-deleted, only deactivated.
    """

    id: str
    name: str
    location: str = ""
    city: str = ""
    is_active: bool = True
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Machine":
        return cls(
            id=doc["id"],
            name=doc.get("name", ""),
            location=doc.get("location") or "",
            city=doc.get("city") or "",
            is_active=bool(doc.get("isActive", True)),
            created_at=to_datetime(doc.get("createdAt")),
            created_by=doc.get("createdBy"),
            updated_at=to_datetime(doc.get("updatedAt")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "city": self.city,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "createdBy": self.created_by,
        }


@dataclass(frozen=True)
class CreateMachineData:
    name: str
    location: str = ""
    city: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
