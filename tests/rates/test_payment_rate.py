from __future__ import annotations

import pytest

from src.cleaning_tracker.cleaning_tracker.core.constants import PAYMENT_SETTINGS_ID, SETTINGS_COLLECTION
from src.cleaning_tracker.cleaning_tracker.core.enums import Role
from src.cleaning_tracker.cleaning_tracker.core.exceptions import AuthorizationError


def test_first_read_initializes_default(container):
    assert container.store.get_by_id(SETTINGS_COLLECTION, PAYMENT_SETTINGS_ID) is None

    assert container.payment_rate_service.get_payment_rate() == 100
    assert container.store.get_by_id(SETTINGS_COLLECTION, PAYMENT_SETTINGS_ID)["rate"] == 100


def test_set_then_read(container):
    result = container.payment_rate_service.set_payment_rate(current_role=Role.ADMIN, rate="125")

    assert result.success is True
    assert result.data == 125
    assert container.payment_rate_service.get_payment_rate() == 125


@pytest.mark.parametrize("rate", [0, -5, "abc", None])
def test_invalid_rates_are_rejected(container, rate):
    result = container.payment_rate_service.set_payment_rate(current_role=Role.ADMIN, rate=rate)

    assert result.success is False
    assert container.payment_rate_service.get_payment_rate() == 100


def test_cleaners_cannot_change_the_rate(container):
    with pytest.raises(AuthorizationError):
        container.payment_rate_service.set_payment_rate(current_role=Role.CLEANER, rate=200)
