from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.core.get_current_user import get_current_landlord
from rentledger.core.get_db import get_db_async
from rentledger.core.safe_handler import safe_handler
from rentledger.identity.supabase import AuthIdentity
from rentledger.schemas.schema import TenantCreate
from rentledger.services.tenant_service import TenantService

router = APIRouter(tags=["Tenant Management"])


@cbv(router=router)
class TenantRoutes:
    @router.post("/tenants", status_code=201)
    @safe_handler
    async def create(
        self,
        request: Request,
        data: TenantCreate,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await TenantService(db).create_tenant(data=data, identity=identity)

    @router.get("/tenants")
    @safe_handler
    async def list_tenants(
        self,
        request: Request,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
        page: int = 1,
        per_page: int = 100,
    ):
        return await TenantService(db).list_tenants(
            identity=identity, page=page, per_page=per_page
        )

    @router.get("/tenants/{tenant_id}")
    @safe_handler
    async def get_tenant(
        self,
        request: Request,
        tenant_id: str,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await TenantService(db).get_tenant(tenant_id=tenant_id, identity=identity)
