from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.core.get_current_user import get_current_landlord
from rentledger.core.get_db import get_db_async
from rentledger.core.safe_handler import safe_handler
from rentledger.identity.supabase import AuthIdentity
from rentledger.schemas.schema import PaymentCreate
from rentledger.services.payment_service import PaymentService

router = APIRouter(tags=["Rent Payments"])


@cbv(router=router)
class PaymentRoutes:
    @router.post("/payments", status_code=201)
    @safe_handler
    async def record(
        self,
        request: Request,
        data: PaymentCreate,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await PaymentService(db).record_payment(data=data, identity=identity)

    @router.get("/payments")
    @safe_handler
    async def list_payments(
        self,
        request: Request,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
        page: int = 1,
        per_page: int = 100,
    ):
        return await PaymentService(db).list_payments(
            identity=identity, page=page, per_page=per_page
        )

    @router.get("/payments/{payment_id}")
    @safe_handler
    async def get_payment(
        self,
        request: Request,
        payment_id: str,
        identity: AuthIdentity = Depends(get_current_landlord),
        db: AsyncSession = Depends(get_db_async),
    ):
        return await PaymentService(db).get_payment(
            payment_id=payment_id, identity=identity
        )
