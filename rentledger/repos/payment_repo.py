from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from rentledger.core.upsert import insert_ignore_conflict
from rentledger.models.enums import PaymentStatus
from rentledger.models.models import Payment, Property, Unit, new_id


class PaymentRepo:
    def __init__(self, db):
        self.db = db

    async def insert_if_new(
        self,
        unit_id: str,
        amount: Decimal,
        reference: str,
        paid_at: datetime,
        status: PaymentStatus = PaymentStatus.SUCCESS,
    ) -> Optional[str]:
        """Record a payment unless its reference is already present.

        Returns the new payment id, or ``None`` when the reference was taken.
        """
        stmt = insert_ignore_conflict(
            self.db,
            Payment,
            {
                "id": new_id(),
                "unit_id": unit_id,
                "amount": amount,
                "reference": reference,
                "status": status,
                "paid_at": paid_at,
            },
            ["reference"],
        ).returning(Payment.id)
        try:
            result = await self.db.execute(stmt)
            payment_id = result.scalar_one_or_none()
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return payment_id

    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        result = await self.db.execute(select(Payment).where(Payment.id == payment_id))
        return result.scalar_one_or_none()

    def _scoped(self):
        return (
            select(Payment)
            .join(Unit, Payment.unit_id == Unit.id)
            .join(Property, Unit.property_id == Property.id)
            .options(selectinload(Payment.unit).selectinload(Unit.property))
        )

    async def get_for_landlord(
        self, payment_id: str, landlord_id: str
    ) -> Optional[Payment]:
        result = await self.db.execute(
            self._scoped().where(
                Payment.id == payment_id, Property.landlord_id == landlord_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_reference_for_landlord(
        self, reference: str, landlord_id: str
    ) -> Optional[Payment]:
        result = await self.db.execute(
            self._scoped().where(
                Payment.reference == reference, Property.landlord_id == landlord_id
            )
        )
        return result.scalar_one_or_none()

    async def list_for_landlord(
        self, landlord_id: str, offset: int = 0, limit: int = 100
    ) -> List[Payment]:
        stmt = (
            self._scoped()
            .where(Property.landlord_id == landlord_id)
            .order_by(Payment.paid_at.desc(), Payment.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

