import logging
import random
from datetime import datetime, timezone
from typing import List

from rentledger.core.exceptions import NotFound, ValidationError
from rentledger.core.mapper import ORMMapper
from rentledger.core.paginate import PaginatePage
from rentledger.identity.supabase import AuthIdentity
from rentledger.repos.payment_repo import PaymentRepo
from rentledger.repos.unit_repo import UnitRepo
from rentledger.schemas.schema import PaymentCreate, PaymentOut, PaymentWithUnitOut

logger = logging.getLogger(__name__)


def generate_reference() -> str:
    return f"REF-{random.randint(10**11, 10**12 - 1)}"


class PaymentService:
    def __init__(self, db):
        self.repo: PaymentRepo = PaymentRepo(db)
        self.unit_repo: UnitRepo = UnitRepo(db)
        self.paginate: PaginatePage = PaginatePage()
        self.mapper: ORMMapper = ORMMapper()

    async def record_payment(self, data: PaymentCreate, identity: AuthIdentity) -> PaymentOut:
        unit = await self.unit_repo.get_for_landlord(data.unit_id, identity.subject)
        if not unit:
            raise NotFound("Unit")

        reference = data.reference or generate_reference()
        paid_at = data.date or datetime.now(timezone.utc)

        payment_id = await self.repo.insert_if_new(
            unit_id=unit.id,
            amount=data.amount,
            reference=reference,
            paid_at=paid_at,
            status=data.status,
        )
        if payment_id is None:
            # Same reference replayed by its owner: hand back the original row.
            existing = await self.repo.get_by_reference_for_landlord(
                reference, identity.subject
            )
            if existing is None:
                raise ValidationError("reference", "already used by another payment")
            logger.info(f"Payment {reference} already recorded, returning existing row")
            return self.mapper.one(existing, PaymentOut)

        payment = await self.repo.get_by_id(payment_id)
        logger.info(f"Manual payment {reference} recorded for unit {unit.id}")
        return self.mapper.one(payment, PaymentOut)

    async def list_payments(
        self, identity: AuthIdentity, page: int = 1, per_page: int = 100
    ) -> List[PaymentWithUnitOut]:
        offset, limit = self.paginate.offset_limit(page, per_page)
        payments = await self.repo.list_for_landlord(
            identity.subject, offset=offset, limit=limit
        )
        return self.mapper.many(payments, PaymentWithUnitOut)

    async def get_payment(self, payment_id: str, identity: AuthIdentity) -> PaymentWithUnitOut:
        payment = await self.repo.get_for_landlord(payment_id, identity.subject)
        return self.mapper.found(payment, PaymentWithUnitOut, "Payment")
