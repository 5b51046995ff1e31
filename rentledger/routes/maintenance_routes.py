from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.core.get_current_user import get_current_landlord
from rentledger.core.get_db import get_db_async
from rentledger.core.safe_handler import safe_handler
from rentledger.identity.supabase import AuthIdentity
from rentledger.schemas.schema import MaintenanceCreate
from rentledger.services.maintenance_service import MaintenanceService

router = APIRouter(tags=["Maintenance"])


@cbv(router=router)
class MaintenanceRoutes:
    @router.post("/maintenance", status_code=201)
    @safe_handler
    async def create(
        self,
        request: Request,
        data: MaintenanceCreate,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await MaintenanceService(db).create_request(data=data, identity=identity)

    @router.get("/maintenance")
    @safe_handler
    async def list_requests(
        self,
        request: Request,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
        page: int = 1,
        per_page: int = 100,
    ):
        return await MaintenanceService(db).list_requests(
            identity=identity, page=page, per_page=per_page
        )
