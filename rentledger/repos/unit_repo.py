from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from rentledger.models.models import Property, Unit


class UnitRepo:
    def __init__(self, db):
        self.db = db

    async def create(self, unit: Unit) -> Unit:
        self.db.add(unit)
        try:
            await self.db.commit()
            await self.db.refresh(unit)
            return unit
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def get_for_landlord(
        self, unit_id: str, landlord_id: str, with_property: bool = False
    ) -> Optional[Unit]:
        stmt = (
            select(Unit)
            .join(Property, Unit.property_id == Property.id)
            .where(Unit.id == unit_id, Property.landlord_id == landlord_id)
        )
        if with_property:
            stmt = stmt.options(selectinload(Unit.property))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_landlord(
        self, landlord_id: str, offset: int = 0, limit: int = 100
    ) -> List[Unit]:
        stmt = (
            select(Unit)
            .join(Property, Unit.property_id == Property.id)
            .options(selectinload(Unit.property))
            .where(Property.landlord_id == landlord_id)
            .order_by(Unit.created_at, Unit.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_customer_code(self, customer_code: str) -> Optional[Unit]:
        # Unscoped: gateway webhooks carry no landlord identity.
        result = await self.db.execute(
            select(Unit).where(Unit.customer_code == customer_code)
        )
        return result.scalar_one_or_none()
