from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ActionResult:
    """Structured outcome for validated write actions.

    Validation problems are reported here instead of raised, so callers can
    show ``message`` directly.
    """

    success: bool
    message: str
    data: Optional[Any] = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ActionResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> "ActionResult":
        return cls(success=False, message=message)

    def to_dict(self) -> dict:
        out = {"success": self.success, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out
