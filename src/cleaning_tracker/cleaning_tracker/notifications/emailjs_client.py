from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from ..core.exceptions import NotificationError

EMAILJS_ENDPOINT = "https://api.emailjs.com/api/v1.0/email/send"


@dataclass(frozen=True)
class EmailJSConfig:
    service_id: str = ""
    template_id: str = ""
    public_key: str = ""
    private_key: Optional[str] = None
    recipient: str = "contact@fluffycandy.se"
    endpoint: str = EMAILJS_ENDPOINT
    enabled: bool = True
    timeout: float = 10.0

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EmailJSConfig":
        data = data or {}
        return cls(
            service_id=str(data.get("service_id") or ""),
            template_id=str(data.get("template_id") or ""),
            public_key=str(data.get("public_key") or ""),
            private_key=data.get("private_key") or None,
            recipient=str(data.get("recipient") or cls.recipient),
            endpoint=str(data.get("endpoint") or EMAILJS_ENDPOINT),
            enabled=bool(data.get("enabled", True)),
            timeout=float(data.get("timeout", 10.0)),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.enabled and self.service_id and self.template_id and self.public_key)


@dataclass(frozen=True)
class DeliveryReceipt:
    status: int
    text: str


class EmailClient(Protocol):
    def send(self, service_id: str, template_id: str, public_key: str, template_params: dict[str, Any]) -> DeliveryReceipt:
        raise NotImplementedError


class EmailJSClient(EmailClient):
    """Client for the EmailJS REST API"""

    def __init__(
        self,
        *,
        endpoint: str = EMAILJS_ENDPOINT,
        private_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.private_key = private_key
        self.timeout = timeout
        self._transport = transport

    def send(self, service_id: str, template_id: str, public_key: str, template_params: dict[str, Any]) -> DeliveryReceipt:
        payload: dict[str, Any] = {
            "service_id": service_id,
            "template_id": template_id,
            "user_id": public_key,
            "template_params": template_params,
        }
        if self.private_key:
            payload["accessToken"] = self.private_key

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.endpoint, json=payload)
        except httpx.HTTPError as e:
            raise NotificationError(f"EmailJS request failed: {e}") from e

        if response.status_code != 200:
            raise NotificationError(f"EmailJS rejected the message ({response.status_code}): {response.text}")
        return DeliveryReceipt(status=response.status_code, text=response.text)
