from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.core.breaker import CircuitBreaker
from rentledger.core.get_current_user import (
    get_current_landlord,
    get_gateway,
    get_gateway_breaker,
)
from rentledger.core.get_db import get_db_async
from rentledger.core.mapper import ORMMapper
from rentledger.core.safe_handler import safe_handler
from rentledger.identity.supabase import AuthIdentity
from rentledger.schemas.schema import UnitCreate, UnitOut
from rentledger.services.unit_service import UnitService

router = APIRouter(tags=["Unit Management"])


@cbv(router=router)
class UnitRoutes:
    @router.post("/units", status_code=201)
    @safe_handler
    async def create(
        self,
        request: Request,
        data: UnitCreate,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
        gateway=Depends(get_gateway),
        breaker: CircuitBreaker = Depends(get_gateway_breaker),
    ):
        created = await UnitService(db, gateway, breaker).create_unit(
            data=data, identity=identity
        )
        return ORMMapper.one(created.unit, UnitOut)

    @router.get("/units")
    @safe_handler
    async def list_units(
        self,
        request: Request,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
        page: int = 1,
        per_page: int = 100,
    ):
        return await UnitService(db).list_units(
            identity=identity, page=page, per_page=per_page
        )

    @router.get("/units/{unit_id}")
    @safe_handler
    async def get_unit(
        self,
        request: Request,
        unit_id: str,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await UnitService(db).get_unit(unit_id=unit_id, identity=identity)
