from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from rentledger.core.upsert import insert_ignore_conflict
from rentledger.models.models import Landlord


class LandlordRepo:
    def __init__(self, db):
        self.db = db

    async def get_by_id(self, landlord_id: str) -> Optional[Landlord]:
        result = await self.db.execute(select(Landlord).where(Landlord.id == landlord_id))
        return result.scalar_one_or_none()

    async def insert_if_absent(self, landlord_id: str, email: str, name: str) -> bool:
        stmt = insert_ignore_conflict(
            self.db,
            Landlord,
            {"id": landlord_id, "email": email, "name": name},
            ["id"],
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return result.rowcount == 1
