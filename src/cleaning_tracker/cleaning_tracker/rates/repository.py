from __future__ import annotations

from ..core.constants import DEFAULT_PAYMENT_RATE, PAYMENT_SETTINGS_ID, SETTINGS_COLLECTION
from ..database.document_store import DocumentStore


class PaymentRateRepository:
    """Singleton ``settings/payment`` record holding the global default rate."""

    def __init__(self, store: DocumentStore, *, default_rate: float = DEFAULT_PAYMENT_RATE):
        self._store = store
        self._default_rate = default_rate

    def get_payment_rate(self) -> float:
        doc = self._store.get_by_id(SETTINGS_COLLECTION, PAYMENT_SETTINGS_ID)
        if doc is not None:
            return doc.get("rate") or self._default_rate

        # First read initializes the record so later reads see the same value.
        self._store.set_by_id(SETTINGS_COLLECTION, PAYMENT_SETTINGS_ID, {"rate": self._default_rate})
        return self._default_rate

    def set_payment_rate(self, rate: float) -> None:
        self._store.set_by_id(SETTINGS_COLLECTION, PAYMENT_SETTINGS_ID, {"rate": rate})
