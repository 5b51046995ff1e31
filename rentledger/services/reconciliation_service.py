"""
Turns Paystack ``charge.success`` events into Payment rows.

Events are matched to a unit through the customer code stored on the unit
when its virtual account was issued. Payment references are the idempotency
key: a redelivered event, or two deliveries racing each other, leave exactly
one row behind.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from rentledger.models.enums import PaymentStatus, ReconciliationOutcome
from rentledger.repos.payment_repo import PaymentRepo
from rentledger.repos.unit_repo import UnitRepo

logger = logging.getLogger(__name__)

CHARGE_SUCCESS = "charge.success"


# Largest kobo amount that fits a Numeric(14, 2) naira column.
MAX_KOBO = 99_999_999_999_999


def _amount_in_kobo(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        amount = value
    elif isinstance(value, (float, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            return None
        if not parsed.is_finite() or parsed != parsed.to_integral_value():
            return None
        amount = int(parsed)
        logger.warning(f"Webhook amount {value!r} is not an integer, reading it as {amount} kobo")
    else:
        return None

    return amount if 0 < amount <= MAX_KOBO else None


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class ReconciliationService:
    def __init__(self, db):
        self.unit_repo: UnitRepo = UnitRepo(db)
        self.payment_repo: PaymentRepo = PaymentRepo(db)

    async def handle_event(self, payload: Any) -> ReconciliationOutcome:
        if not isinstance(payload, dict):
            logger.warning("Webhook payload is not an object, ignoring")
            return ReconciliationOutcome.MALFORMED

        event = payload.get("event")
        if event != CHARGE_SUCCESS:
            logger.info(f"Ignoring webhook event {event!r}")
            return ReconciliationOutcome.IGNORED_EVENT

        data = payload.get("data")
        if not isinstance(data, dict):
            logger.warning("charge.success without a data object")
            return ReconciliationOutcome.MALFORMED

        amount = _amount_in_kobo(data.get("amount"))
        reference = _text(data.get("reference"))
        if amount is None or reference is None:
            logger.warning(
                f"charge.success with invalid amount or reference: "
                f"amount={data.get('amount')!r} reference={data.get('reference')!r}"
            )
            return ReconciliationOutcome.MALFORMED

        customer = data.get("customer")
        customer_code = _text(customer.get("customer_code")) if isinstance(customer, dict) else None
        if customer_code is None:
            logger.warning(f"Payment {reference} carries no customer code")
            return ReconciliationOutcome.NO_CUSTOMER

        unit = await self.unit_repo.get_by_customer_code(customer_code)
        if unit is None:
            logger.warning(f"Payment {reference} for unknown customer {customer_code}")
            return ReconciliationOutcome.UNKNOWN_CUSTOMER

        payment_id = await self.payment_repo.insert_if_new(
            unit_id=unit.id,
            amount=Decimal(amount) / 100,
            reference=reference,
            paid_at=datetime.now(timezone.utc),
            status=PaymentStatus.SUCCESS,
        )
        if payment_id is None:
            logger.info(f"Payment {reference} already recorded")
            return ReconciliationOutcome.DUPLICATE

        logger.info(f"Payment {reference} recorded for unit {unit.id}")
        return ReconciliationOutcome.RECORDED
