from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Principal:
    """Signed-in identity as reported by the identity provider."""

    uid: str
    email: str
    display_name: Optional[str] = None


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    uid: str
    email: str
    name: str
    role: Role
