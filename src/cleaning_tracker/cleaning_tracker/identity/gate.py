from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Optional

from ..core.enums import Role
from ..users.repository import UserRepository
from .model import Principal

DEFAULT_ROLE_MAP = {
    "superadmin@fluffycandy.se": Role.SUPERIOR_ADMIN.value,
    "admin@fluffycandy.se": Role.ADMIN.value,
}


def load_role_map(raw: Optional[str] = None, *, path: Optional[str] = None) -> dict[str, Role]:
    """Build the email -> role mapping from a JSON string or JSON file.

    Falls back to the historical privileged addresses when neither is given.
    """
    if raw:
        data = json.loads(raw)
    elif path:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    else:
        data = DEFAULT_ROLE_MAP

    if not isinstance(data, dict):
        raise ValueError("Role map must be a JSON object of email -> role")
    return {str(email).strip().lower(): Role(role) for email, role in data.items()}


class RoleGate:
    """Resolve a signed-in principal to a role.

    Privileged roles come from the configured allow-list; everyone else gets
    the role stored on their profile, or ``cleaner``.
    """

    def __init__(self, role_map: Mapping[str, Role], users: Optional[UserRepository] = None):
        self._role_map = {k.lower(): Role(v) for k, v in role_map.items()}
        self._users = users

    def role_for_email(self, email: str) -> Optional[Role]:
        return self._role_map.get((email or "").strip().lower())

    def is_superior_admin(self, email: str) -> bool:
        return self.role_for_email(email) == Role.SUPERIOR_ADMIN

    def is_admin(self, email: str) -> bool:
        return self.role_for_email(email) == Role.ADMIN

    def is_any_admin(self, email: str) -> bool:
        return self.is_superior_admin(email) or self.is_admin(email)

    def privileged_emails(self) -> dict[str, Role]:
        return dict(self._role_map)

    def resolve(self, principal: Principal) -> Role:
        role = self.role_for_email(principal.email)
        if role:
            return role

        if self._users:
            profile = self._users.get_user_profile(principal.uid)
            # Stored profiles cannot grant admin rights on their own.
            if profile and not profile.role.is_admin:
                return profile.role
        return Role.CLEANER
