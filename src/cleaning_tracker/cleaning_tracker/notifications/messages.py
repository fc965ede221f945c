"""Swedish email templates for the two notification events."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from ..common.datetime_utils import format_local


def cleaning_logged_params(
    *,
    recipient: str,
    cleaner_name: str,
    machine_name: str,
    machine_location: str,
    payment_rate: float,
    when: datetime,
) -> dict[str, Any]:
    timestamp = format_local(when)
    return {
        "to_email": recipient,
        "subject": f"🧹 Städning Registrerad - {machine_name}",
        "notification_type": "Städning Registrerad",
        "timestamp": timestamp,
        "message": (
            f"👤 Städare: {cleaner_name}\n"
            f"🏭 Maskin: {machine_name}\n"
            f"📍 Plats: {machine_location}\n"
            f"⏰ Tid: {timestamp}\n"
            f"💰 Betalning: {payment_rate:g} SEK"
        ),
    }


def payment_processed_params(
    *,
    recipient: str,
    paid_by: str,
    total_amount: float,
    cleaning_count: int,
    cleaners: Iterable[str],
    when: datetime,
) -> dict[str, Any]:
    timestamp = format_local(when)
    return {
        "to_email": recipient,
        "subject": f"💰 Betalning Genomförd - {total_amount:g} SEK",
        "notification_type": "Betalning Genomförd",
        "timestamp": timestamp,
        "message": (
            f"💳 Betalt av: {paid_by}\n"
            f"💰 Totalt belopp: {total_amount:g} SEK\n"
            f"🧹 Antal städningar: {cleaning_count}\n"
            f"👥 Städare: {', '.join(cleaners)}\n"
            f"⏰ Betalningstid: {timestamp}"
        ),
    }
