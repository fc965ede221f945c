from __future__ import annotations

import re
from typing import Callable, Optional, Protocol

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import ACCOUNTS_COLLECTION, MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, DomainError
from ..database.document_store import SERVER_TIMESTAMP, DocumentStore
from .model import Principal

AuthListener = Callable[[Optional[Principal]], None]

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class IdentityError(DomainError):
    """Account creation failure with a provider error code."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class IdentityProvider(Protocol):
    def verify_credentials(self, email: str, password: str) -> Principal:
        """Check email/password without changing the signed-in state."""

        raise NotImplementedError

    def sign_in(self, email: str, password: str) -> Principal:
        raise NotImplementedError

    def sign_out(self) -> None:
        raise NotImplementedError

    def on_change(self, callback: AuthListener) -> Callable[[], None]:
        """Subscribe to sign-in/sign-out events; returns the unsubscribe function."""

        raise NotImplementedError

    def create_account(self, email: str, password: str, *, display_name: Optional[str] = None) -> Principal:
        raise NotImplementedError


class DocumentIdentityProvider(IdentityProvider):
    """Email/password accounts kept in the ``accounts`` collection with werkzeug hashes.

    ``sign_in``/``sign_out``/``current`` track a single local session (scripts,
    tests). The web app keeps who is signed in in the Flask session and only
    uses ``verify_credentials``.
    """

    def __init__(self, store: DocumentStore):
        self._store = store
        self._listeners: list[AuthListener] = []
        self._current: Optional[Principal] = None

    @property
    def current(self) -> Optional[Principal]:
        return self._current

    def _find(self, email: str) -> Optional[dict]:
        docs = self._store.get_all(ACCOUNTS_COLLECTION, filters={"email": email.strip().lower()})
        return docs[0] if docs else None

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self._current)

    def verify_credentials(self, email: str, password: str) -> Principal:
        account = self._find(email or "")
        if not account or not account.get("isActive", True):
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(account.get("passwordHash", ""), password or "")
        except Exception:
            # e.g. placeholder hashes or corrupted values
            ok = False
        if not ok:
            raise AuthenticationError("Invalid email or password")

        return Principal(uid=account["id"], email=account["email"], display_name=account.get("displayName"))

    def sign_in(self, email: str, password: str) -> Principal:
        self._current = self.verify_credentials(email, password)
        self._emit()
        return self._current

    def sign_out(self) -> None:
        self._current = None
        self._emit()

    def on_change(self, callback: AuthListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def create_account(self, email: str, password: str, *, display_name: Optional[str] = None) -> Principal:
        email = (email or "").strip().lower()
        if not _EMAIL_RE.match(email):
            raise IdentityError("auth/invalid-email", "Invalid email address")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityError("auth/weak-password", "Password is too weak")
        if self._find(email):
            raise IdentityError("auth/email-already-in-use", "Email is already in use")

        uid = self._store.insert(
            ACCOUNTS_COLLECTION,
            {
                "email": email,
                "passwordHash": generate_password_hash(password),
                "displayName": display_name,
                "isActive": True,
                "createdAt": SERVER_TIMESTAMP,
            },
        )
        return Principal(uid=uid, email=email, display_name=display_name)
