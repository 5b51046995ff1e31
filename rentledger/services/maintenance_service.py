from typing import List

from rentledger.core.exceptions import NotFound
from rentledger.core.mapper import ORMMapper
from rentledger.core.paginate import PaginatePage
from rentledger.identity.supabase import AuthIdentity
from rentledger.models.models import Maintenance
from rentledger.repos.maintenance_repo import MaintenanceRepo
from rentledger.repos.property_repo import PropertyRepo
from rentledger.repos.unit_repo import UnitRepo
from rentledger.schemas.schema import (
    MaintenanceCreate,
    MaintenanceDetailOut,
    MaintenanceOut,
)


class MaintenanceService:
    def __init__(self, db):
        self.repo: MaintenanceRepo = MaintenanceRepo(db)
        self.property_repo: PropertyRepo = PropertyRepo(db)
        self.unit_repo: UnitRepo = UnitRepo(db)
        self.paginate: PaginatePage = PaginatePage()
        self.mapper: ORMMapper = ORMMapper()

    async def create_request(
        self, data: MaintenanceCreate, identity: AuthIdentity
    ) -> MaintenanceOut:
        prop = await self.property_repo.get_for_landlord(data.property_id, identity.subject)
        if not prop:
            raise NotFound("Property")

        if data.unit_id:
            unit = await self.unit_repo.get_for_landlord(data.unit_id, identity.subject)
            if not unit or unit.property_id != prop.id:
                raise NotFound("Unit")

        request = await self.repo.create(
            Maintenance(
                property_id=prop.id,
                unit_id=data.unit_id,
                title=data.title,
                description=data.description,
                priority=data.priority,
                status=data.status,
            )
        )
        return self.mapper.one(request, MaintenanceOut)

    async def list_requests(
        self, identity: AuthIdentity, page: int = 1, per_page: int = 100
    ) -> List[MaintenanceDetailOut]:
        offset, limit = self.paginate.offset_limit(page, per_page)
        requests = await self.repo.list_for_landlord(
            identity.subject, offset=offset, limit=limit
        )
        return self.mapper.many(requests, MaintenanceDetailOut)
