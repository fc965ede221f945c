from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterable, Optional

import structlog

from ..common.datetime_utils import now_utc
from ..core.enums import NotificationStatus
from .emailjs_client import EmailClient, EmailJSConfig
from .messages import cleaning_logged_params, payment_processed_params

log = structlog.get_logger(__name__)


class NotificationDispatcher:
    """Best-effort outbound email on "cleaning logged" and "payment processed".

    Never raises, never retries, never queues: a failed send is reported as
    ``NotificationStatus.FAILED`` and dropped.
    """

    def __init__(
        self,
        client: Optional[EmailClient],
        config: EmailJSConfig,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._client = client
        self._config = config
        self._clock = clock

    def notify_cleaning_logged(
        self,
        *,
        cleaner_name: str,
        machine_name: str,
        machine_location: str,
        payment_rate: float,
    ) -> NotificationStatus:
        params = cleaning_logged_params(
            recipient=self._config.recipient,
            cleaner_name=cleaner_name,
            machine_name=machine_name,
            machine_location=machine_location,
            payment_rate=payment_rate,
            when=self._clock(),
        )
        return self._dispatch("cleaning_logged", params)

    def notify_payment_processed(
        self,
        *,
        paid_by: str,
        total_amount: float,
        cleaning_count: int,
        cleaners: Iterable[str],
    ) -> NotificationStatus:
        params = payment_processed_params(
            recipient=self._config.recipient,
            paid_by=paid_by,
            total_amount=total_amount,
            cleaning_count=cleaning_count,
            cleaners=list(cleaners),
            when=self._clock(),
        )
        return self._dispatch("payment_processed", params)

    def _dispatch(self, event: str, params: dict[str, Any]) -> NotificationStatus:
        if self._client is None or not self._config.is_configured:
            log.info("notification_disabled", notification=event)
            return NotificationStatus.DISABLED

        try:
            receipt = self._client.send(
                self._config.service_id,
                self._config.template_id,
                self._config.public_key,
                params,
            )
        except Exception as e:
            log.warning("notification_failed", notification=event, error=str(e))
            return NotificationStatus.FAILED

        log.info("notification_sent", notification=event, status=receipt.status)
        return NotificationStatus.SENT
