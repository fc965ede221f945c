from __future__ import annotations

import structlog

from ..core.exceptions import AuthenticationError
from ..users.repository import UserRepository
from .gate import RoleGate
from .model import SessionUser
from .provider import IdentityProvider

log = structlog.get_logger(__name__)


class AuthService:
    """Use case: check credentials and resolve the role for a new web session.

    Stateless: the caller stores the returned ``SessionUser`` in its own
    session, so concurrent users never share sign-in state.
    """

    def __init__(self, identity: IdentityProvider, gate: RoleGate, users: UserRepository):
        self._identity = identity
        self._gate = gate
        self._users = users

    def sign_in(self, email: str, password: str) -> SessionUser:
        principal = self._identity.verify_credentials(email, password)
        role = self._gate.resolve(principal)

        profile = self._users.get_user_profile(principal.uid)
        if profile and not profile.is_active and not role.is_admin:
            raise AuthenticationError("This account has been deactivated")

        name = (profile.name if profile else None) or principal.display_name or principal.email
        log.info("signed_in", uid=principal.uid, role=role.value)
        return SessionUser(uid=principal.uid, email=principal.email, name=name, role=role)
