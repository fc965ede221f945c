from __future__ import annotations

import structlog

from ..common.validators import parse_rate, rate_error
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.result import ActionResult
from .repository import PaymentRateRepository

log = structlog.get_logger(__name__)


class PaymentRateService:
    """Use case: read and change the global default payment rate (admins)."""

    def __init__(self, rates: PaymentRateRepository):
        self._rates = rates

    def get_payment_rate(self) -> float:
        return self._rates.get_payment_rate()

    def set_payment_rate(self, *, current_role: Role, rate) -> ActionResult:
        if not current_role.is_admin:
            raise AuthorizationError("You do not have permission")

        try:
            value = parse_rate(rate)
        except ValidationError as e:
            return ActionResult.fail(str(e))

        error = rate_error(value)
        if error:
            return ActionResult.fail(error)

        self._rates.set_payment_rate(value)
        log.info("payment_rate_updated", rate=value)
        return ActionResult.ok("Payment rate updated successfully", value)
