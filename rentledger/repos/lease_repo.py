from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from rentledger.models.enums import LeaseStatus
from rentledger.models.models import Lease, Property, Tenant, Unit


class LeaseRepo:
    def __init__(self, db):
        self.db = db

    async def create_with_snapshot(
        self, lease: Lease, unit: Unit, tenant: Tenant, supersede: bool = True
    ) -> Lease:
        """
        Insert the lease and overwrite the unit's tenant snapshot in one
        transaction. Earlier current leases on the unit are terminated first.
        Nothing is persisted if any step fails.
        """
        try:
            if supersede:
                await self.db.execute(
                    update(Lease)
                    .where(
                        Lease.unit_id == unit.id,
                        Lease.status != LeaseStatus.TERMINATED,
                    )
                    .values(status=LeaseStatus.TERMINATED)
                    .execution_options(synchronize_session=False)
                )
            self.db.add(lease)
            unit.apply_tenant_snapshot(tenant.name, tenant.email, tenant.phone_number)
            self.db.add(unit)
            await self.db.commit()
            await self.db.refresh(lease)
            return lease
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    def _scoped(self):
        return (
            select(Lease)
            .join(Unit, Lease.unit_id == Unit.id)
            .join(Property, Unit.property_id == Property.id)
            .options(
                selectinload(Lease.tenant),
                selectinload(Lease.unit).selectinload(Unit.property),
            )
        )

    async def get_for_landlord(self, lease_id: str, landlord_id: str) -> Optional[Lease]:
        stmt = self._scoped().where(
            Lease.id == lease_id, Property.landlord_id == landlord_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_landlord(
        self, landlord_id: str, offset: int = 0, limit: int = 100
    ) -> List[Lease]:
        stmt = (
            self._scoped()
            .where(Property.landlord_id == landlord_id)
            .order_by(Lease.created_at.desc(), Lease.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

