from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for permission checks."""

    CLEANER = "cleaner"
    ADMIN = "admin"
    SUPERIOR_ADMIN = "superior_admin"

    @property
    def is_admin(self) -> bool:
        return self in (Role.ADMIN, Role.SUPERIOR_ADMIN)


class NotificationStatus(str, Enum):
    """Outcome of a best-effort outbound notification."""

    SENT = "sent"
    FAILED = "failed"
    DISABLED = "disabled"
