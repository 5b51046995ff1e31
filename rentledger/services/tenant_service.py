from typing import List

from rentledger.core.mapper import ORMMapper
from rentledger.core.paginate import PaginatePage
from rentledger.identity.supabase import AuthIdentity
from rentledger.repos.tenant_repo import TenantRepo
from rentledger.schemas.schema import TenantCreate, TenantOut, TenantWithLeasesOut
from rentledger.services.auth_service import AuthService


class TenantService:
    def __init__(self, db):
        self.repo: TenantRepo = TenantRepo(db)
        self.auth: AuthService = AuthService(db)
        self.paginate: PaginatePage = PaginatePage()
        self.mapper: ORMMapper = ORMMapper()

    async def create_tenant(self, data: TenantCreate, identity: AuthIdentity) -> TenantOut:
        await self.auth.ensure_landlord(identity)

        tenant = await self.repo.create(
            landlord_id=identity.subject,
            name=data.name,
            email=str(data.email),
            phone_number=data.phone_number,
            national_id=data.national_id,
        )
        return self.mapper.one(tenant, TenantOut)

    async def list_tenants(
        self, identity: AuthIdentity, page: int = 1, per_page: int = 100
    ) -> List[TenantWithLeasesOut]:
        offset, limit = self.paginate.offset_limit(page, per_page)
        tenants = await self.repo.list_for_landlord(
            identity.subject, offset=offset, limit=limit
        )
        return self.mapper.many(tenants, TenantWithLeasesOut)

    async def get_tenant(self, tenant_id: str, identity: AuthIdentity) -> TenantWithLeasesOut:
        tenant = await self.repo.get_for_landlord(
            tenant_id, identity.subject, with_leases=True
        )
        return self.mapper.found(tenant, TenantWithLeasesOut, "Tenant")
