from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.constants import USERS_COLLECTION
from ..core.enums import Role
from ..database.document_store import SERVER_TIMESTAMP, DocumentStore
from .model import CleanerProfile


class UserRepository:
    """Store adapter for ``users`` profile documents (keyed by identity uid)."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def create_user_profile(
        self,
        *,
        uid: str,
        email: str,
        name: str,
        role: Role,
        created_by: Optional[str] = None,
        assigned_machine_id: Optional[str] = None,
        payment_rate: Optional[float] = None,
    ) -> None:
        self._store.set_by_id(
            USERS_COLLECTION,
            uid,
            {
                "email": email,
                "name": name,
                "role": role.value,
                "createdAt": SERVER_TIMESTAMP,
                "createdBy": created_by,
                "isActive": True,
                "assignedMachineId": assigned_machine_id or None,
                "paymentRate": payment_rate or None,
            },
        )

    def get_user_profile(self, uid: str) -> Optional[CleanerProfile]:
        doc = self._store.get_by_id(USERS_COLLECTION, uid)
        return CleanerProfile.from_document(doc) if doc else None

    def get_all_cleaners(self) -> Sequence[CleanerProfile]:
        docs = self._store.get_all(USERS_COLLECTION, filters={"role": Role.CLEANER.value})
        return [CleanerProfile.from_document(d) for d in docs]

    def get_cleaners_by_machine(self, machine_id: str) -> Sequence[CleanerProfile]:
        docs = self._store.get_all(
            USERS_COLLECTION,
            filters={"role": Role.CLEANER.value, "assignedMachineId": machine_id},
        )
        return [CleanerProfile.from_document(d) for d in docs]

    def update_cleaner_status(self, uid: str, is_active: bool) -> None:
        self.update_fields(uid, {"isActive": bool(is_active)})

    def update_fields(self, uid: str, updates: dict[str, Any]) -> None:
        self._store.update_by_id(USERS_COLLECTION, uid, {**updates, "updatedAt": SERVER_TIMESTAMP})
