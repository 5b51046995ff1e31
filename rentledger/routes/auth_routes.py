from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.core.get_current_user import get_current_landlord
from rentledger.core.get_db import get_db_async
from rentledger.core.safe_handler import safe_handler
from rentledger.identity.supabase import AuthIdentity
from rentledger.schemas.schema import SyncRequest
from rentledger.services.auth_service import AuthService

router = APIRouter(tags=["Landlord Authentication"])


@cbv(router)
class AuthRoutes:
    @router.post("/auth/sync")
    @safe_handler
    async def sync(
        self,
        request: Request,
        data: SyncRequest | None = None,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await AuthService(
            db, default_name=request.app.state.settings.DEFAULT_LANDLORD_NAME
        ).sync(identity, name=data.name if data else None)
