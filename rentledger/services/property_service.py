from typing import List

from rentledger.core.mapper import ORMMapper
from rentledger.core.paginate import PaginatePage
from rentledger.identity.supabase import AuthIdentity
from rentledger.repos.property_repo import PropertyRepo
from rentledger.schemas.schema import PropertyCreate, PropertyOut, PropertyWithUnitsOut
from rentledger.services.auth_service import AuthService


class PropertyService:
    def __init__(self, db):
        self.repo: PropertyRepo = PropertyRepo(db)
        self.auth: AuthService = AuthService(db)
        self.paginate: PaginatePage = PaginatePage()
        self.mapper: ORMMapper = ORMMapper()

    async def create_property(
        self, data: PropertyCreate, identity: AuthIdentity
    ) -> PropertyOut:
        await self.auth.ensure_landlord(identity)

        prop = await self.repo.create(
            landlord_id=identity.subject,
            name=data.name,
            address=data.address,
            city=data.city,
            state=data.state,
        )
        return self.mapper.one(prop, PropertyOut)

    async def list_properties(
        self, identity: AuthIdentity, page: int = 1, per_page: int = 100
    ) -> List[PropertyWithUnitsOut]:
        offset, limit = self.paginate.offset_limit(page, per_page)
        props = await self.repo.list_for_landlord(
            identity.subject, offset=offset, limit=limit
        )
        return self.mapper.many(props, PropertyWithUnitsOut)

    async def get_property(
        self, property_id: str, identity: AuthIdentity
    ) -> PropertyWithUnitsOut:
        prop = await self.repo.get_for_landlord(
            property_id, identity.subject, with_units=True
        )
        return self.mapper.found(prop, PropertyWithUnitsOut, "Property")
