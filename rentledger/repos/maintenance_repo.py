from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from rentledger.models.models import Maintenance, Property


class MaintenanceRepo:
    def __init__(self, db):
        self.db = db

    async def create(self, request: Maintenance) -> Maintenance:
        self.db.add(request)
        try:
            await self.db.commit()
            await self.db.refresh(request)
            return request
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def list_for_landlord(
        self, landlord_id: str, offset: int = 0, limit: int = 100
    ) -> List[Maintenance]:
        stmt = (
            select(Maintenance)
            .join(Property, Maintenance.property_id == Property.id)
            .options(selectinload(Maintenance.property), selectinload(Maintenance.unit))
            .where(Property.landlord_id == landlord_id)
            .order_by(Maintenance.date.desc(), Maintenance.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
