from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.core.get_current_user import get_current_landlord
from rentledger.core.get_db import get_db_async
from rentledger.core.safe_handler import safe_handler
from rentledger.identity.supabase import AuthIdentity
from rentledger.schemas.schema import PropertyCreate
from rentledger.services.property_service import PropertyService

router = APIRouter(tags=["Property Management"])


@cbv(router=router)
class PropertyRoutes:
    @router.post("/properties", status_code=201)
    @safe_handler
    async def create(
        self,
        request: Request,
        data: PropertyCreate,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await PropertyService(db).create_property(data=data, identity=identity)

    @router.get("/properties")
    @safe_handler
    async def list_properties(
        self,
        request: Request,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
        page: int = 1,
        per_page: int = 100,
    ):
        return await PropertyService(db).list_properties(
            identity=identity, page=page, per_page=per_page
        )

    @router.get("/properties/{property_id}")
    @safe_handler
    async def get_property(
        self,
        request: Request,
        property_id: str,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await PropertyService(db).get_property(
            property_id=property_id, identity=identity
        )
