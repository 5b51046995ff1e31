import logging
from typing import List

from rentledger.core.exceptions import NotFound, ValidationError
from rentledger.core.mapper import ORMMapper
from rentledger.core.paginate import PaginatePage
from rentledger.identity.supabase import AuthIdentity
from rentledger.models.enums import LeaseStatus
from rentledger.models.models import Lease
from rentledger.repos.lease_repo import LeaseRepo
from rentledger.repos.tenant_repo import TenantRepo
from rentledger.repos.unit_repo import UnitRepo
from rentledger.schemas.schema import LeaseCreate, LeaseDetailOut, LeaseOut

logger = logging.getLogger(__name__)


class LeaseService:
    def __init__(self, db):
        self.repo: LeaseRepo = LeaseRepo(db)
        self.tenant_repo: TenantRepo = TenantRepo(db)
        self.unit_repo: UnitRepo = UnitRepo(db)
        self.paginate: PaginatePage = PaginatePage()
        self.mapper: ORMMapper = ORMMapper()

    async def create_lease(self, data: LeaseCreate, identity: AuthIdentity) -> LeaseOut:
        """
        Bind a tenant to a unit. The unit's tenant snapshot is overwritten
        with this tenant's details in the same transaction, and any lease
        still current on the unit is terminated unless the new one is
        itself recorded as terminated.
        """
        if data.end_date < data.start_date:
            raise ValidationError("endDate", "must not be before startDate")

        tenant = await self.tenant_repo.get_for_landlord(data.tenant_id, identity.subject)
        if not tenant:
            raise NotFound("Tenant")

        unit = await self.unit_repo.get_for_landlord(data.unit_id, identity.subject)
        if not unit:
            raise NotFound("Unit")

        lease = Lease(
            tenant_id=tenant.id,
            unit_id=unit.id,
            start_date=data.start_date,
            end_date=data.end_date,
            monthly_rent=data.monthly_rent,
            security_deposit=data.security_deposit,
            status=data.status,
        )
        lease = await self.repo.create_with_snapshot(
            lease,
            unit,
            tenant,
            supersede=data.status != LeaseStatus.TERMINATED,
        )
        logger.info(f"Lease {lease.id} created for unit {unit.id}")
        return self.mapper.one(lease, LeaseOut)

    async def list_leases(
        self, identity: AuthIdentity, page: int = 1, per_page: int = 100
    ) -> List[LeaseDetailOut]:
        offset, limit = self.paginate.offset_limit(page, per_page)
        leases = await self.repo.list_for_landlord(
            identity.subject, offset=offset, limit=limit
        )
        return self.mapper.many(leases, LeaseDetailOut)

    async def get_lease(self, lease_id: str, identity: AuthIdentity) -> LeaseDetailOut:
        lease = await self.repo.get_for_landlord(lease_id, identity.subject)
        return self.mapper.found(lease, LeaseDetailOut, "Lease")
