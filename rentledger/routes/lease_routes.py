from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.core.get_current_user import get_current_landlord
from rentledger.core.get_db import get_db_async
from rentledger.core.safe_handler import safe_handler
from rentledger.identity.supabase import AuthIdentity
from rentledger.schemas.schema import LeaseCreate
from rentledger.services.lease_service import LeaseService

router = APIRouter(tags=["Lease Management"])


@cbv(router=router)
class LeaseRoutes:
    @router.post("/leases", status_code=201)
    @safe_handler
    async def create(
        self,
        request: Request,
        data: LeaseCreate,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await LeaseService(db).create_lease(data=data, identity=identity)

    @router.get("/leases")
    @safe_handler
    async def list_leases(
        self,
        request: Request,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
        page: int = 1,
        per_page: int = 100,
    ):
        return await LeaseService(db).list_leases(
            identity=identity, page=page, per_page=per_page
        )

    @router.get("/leases/{lease_id}")
    @safe_handler
    async def get_lease(
        self,
        request: Request,
        lease_id: str,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await LeaseService(db).get_lease(lease_id=lease_id, identity=identity)
