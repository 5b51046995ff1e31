from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from rentledger.models.models import Lease, Tenant


class TenantRepo:
    def __init__(self, db):
        self.db = db

    async def create(
        self,
        landlord_id: str,
        name: str,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        national_id: Optional[str] = None,
    ) -> Tenant:
        tenant = Tenant(
            landlord_id=landlord_id,
            name=name,
            email=email,
            phone_number=phone_number,
            national_id=national_id,
        )
        self.db.add(tenant)
        try:
            await self.db.commit()
            await self.db.refresh(tenant)
            return tenant
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def get_for_landlord(
        self, tenant_id: str, landlord_id: str, with_leases: bool = False
    ) -> Optional[Tenant]:
        stmt = select(Tenant).where(
            Tenant.id == tenant_id, Tenant.landlord_id == landlord_id
        )
        if with_leases:
            stmt = stmt.options(selectinload(Tenant.leases).selectinload(Lease.unit))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_landlord(
        self, landlord_id: str, offset: int = 0, limit: int = 100
    ) -> List[Tenant]:
        stmt = (
            select(Tenant)
            .options(selectinload(Tenant.leases).selectinload(Lease.unit))
            .where(Tenant.landlord_id == landlord_id)
            .order_by(Tenant.created_at, Tenant.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
