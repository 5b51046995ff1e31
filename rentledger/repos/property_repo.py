from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from rentledger.models.models import Property


class PropertyRepo:
    def __init__(self, db):
        self.db = db

    async def create(
        self, landlord_id: str, name: str, address: str, city: str, state: str
    ) -> Property:
        new_property = Property(
            landlord_id=landlord_id,
            name=name,
            address=address,
            city=city,
            state=state,
        )
        self.db.add(new_property)
        try:
            await self.db.commit()
            await self.db.refresh(new_property)
            return new_property
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def get_for_landlord(
        self, property_id: str, landlord_id: str, with_units: bool = False
    ) -> Optional[Property]:
        stmt = select(Property).where(
            Property.id == property_id, Property.landlord_id == landlord_id
        )
        if with_units:
            stmt = stmt.options(selectinload(Property.units))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_landlord(
        self, landlord_id: str, offset: int = 0, limit: int = 100
    ) -> List[Property]:
        stmt = (
            select(Property)
            .options(selectinload(Property.units))
            .where(Property.landlord_id == landlord_id)
            .order_by(Property.created_at, Property.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
