from __future__ import annotations

from typing import Any, Optional, Sequence

import structlog

from ..core.constants import MACHINES_COLLECTION
from ..core.result import ActionResult
from ..database.document_store import SERVER_TIMESTAMP, DocumentStore
from .model import CreateMachineData, Machine

log = structlog.get_logger(__name__)


class MachineRepository:
    """Store adapter for the ``machines`` collection."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def create_machine(self, data: CreateMachineData, created_by: str) -> ActionResult:
        # Names are unique (exact, case-sensitive match).
        existing = self._store.get_all(MACHINES_COLLECTION, filters={"name": data.name})
        if existing:
            return ActionResult.fail("Machine with this name already exists")

        machine_id = self._store.insert(
            MACHINES_COLLECTION,
            {
                **data.extra,
                "name": data.name,
                "location": data.location,
                "city": data.city,
                "isActive": True,
                "createdAt": SERVER_TIMESTAMP,
                "createdBy": created_by,
            },
        )
        log.info("machine_created", machine_id=machine_id, name=data.name, created_by=created_by)
        return ActionResult.ok("Machine created successfully", machine_id)

    def get_machines(self) -> Sequence[Machine]:
        docs = self._store.get_all(MACHINES_COLLECTION, order_by="createdAt", descending=True)
        return [Machine.from_document(d) for d in docs]

    def get_machine(self, machine_id: str) -> Optional[Machine]:
        if not machine_id:
            return None
        doc = self._store.get_by_id(MACHINES_COLLECTION, machine_id)
        return Machine.from_document(doc) if doc else None

    def update_machine(self, machine_id: str, updates: dict[str, Any]) -> None:
        self._store.update_by_id(MACHINES_COLLECTION, machine_id, {**updates, "updatedAt": SERVER_TIMESTAMP})

    def toggle_machine_status(self, machine_id: str, is_active: bool) -> None:
        # Assigned cleaners keep their reference; nothing cascades.
        self._store.update_by_id(
            MACHINES_COLLECTION,
            machine_id,
            {"isActive": bool(is_active), "updatedAt": SERVER_TIMESTAMP},
        )
