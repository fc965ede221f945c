from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from src.cleaning_tracker.cleaning_tracker.core.enums import NotificationStatus
from src.cleaning_tracker.cleaning_tracker.core.exceptions import NotificationError
from src.cleaning_tracker.cleaning_tracker.notifications.dispatcher import NotificationDispatcher
from src.cleaning_tracker.cleaning_tracker.notifications.emailjs_client import EmailJSClient, EmailJSConfig

CONFIG = EmailJSConfig(service_id="svc", template_id="tpl", public_key="pub", recipient="office@example.com")
WHEN = datetime(2026, 6, 1, 10, 5, tzinfo=timezone.utc)


def _client(handler, **kwargs):
    return EmailJSClient(transport=httpx.MockTransport(handler), **kwargs)


def test_client_posts_emailjs_payload():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(200, text="OK")

    receipt = _client(handler, private_key="priv").send("svc", "tpl", "pub", {"a": 1})

    assert receipt.status == 200
    assert seen == [
        {"service_id": "svc", "template_id": "tpl", "user_id": "pub", "template_params": {"a": 1}, "accessToken": "priv"}
    ]


def test_client_raises_on_rejection():
    with pytest.raises(NotificationError):
        _client(lambda request: httpx.Response(400, text="bad template")).send("svc", "tpl", "pub", {})


def test_cleaning_logged_message_is_sent():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content)["template_params"])
        return httpx.Response(200, text="OK")

    dispatcher = NotificationDispatcher(_client(handler), CONFIG, clock=lambda: WHEN)
    status = dispatcher.notify_cleaning_logged(
        cleaner_name="Cleo", machine_name="Kista", machine_location="Mall", payment_rate=120
    )

    assert status == NotificationStatus.SENT
    (params,) = bodies
    assert params["to_email"] == "office@example.com"
    assert params["timestamp"] == "2026-06-01 12:05"
    assert "Kista" in params["subject"]
    assert "120 SEK" in params["message"]


def test_payment_processed_lists_cleaners():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content)["template_params"])
        return httpx.Response(200, text="OK")

    dispatcher = NotificationDispatcher(_client(handler), CONFIG, clock=lambda: WHEN)
    dispatcher.notify_payment_processed(paid_by="Alice", total_amount=320, cleaning_count=3, cleaners=["Ari", "Cleo"])

    assert "320 SEK" in bodies[0]["subject"]
    assert "Ari, Cleo" in bodies[0]["message"]


def test_delivery_failure_is_reported_not_raised():
    def handler(request):
        raise httpx.ConnectError("unreachable")

    dispatcher = NotificationDispatcher(_client(handler), CONFIG)

    status = dispatcher.notify_payment_processed(paid_by="Alice", total_amount=1, cleaning_count=1, cleaners=[])

    assert status == NotificationStatus.FAILED


def test_unconfigured_dispatcher_is_disabled():
    dispatcher = NotificationDispatcher(None, EmailJSConfig.from_dict({"enabled": False}))

    status = dispatcher.notify_cleaning_logged(
        cleaner_name="Cleo", machine_name="Kista", machine_location="Mall", payment_rate=100
    )

    assert status == NotificationStatus.DISABLED
