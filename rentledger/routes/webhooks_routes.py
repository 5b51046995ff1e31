from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.core.get_db import get_db_async
from rentledger.core.safe_handler import safe_handler
from rentledger.webhooks.service_webhooks import PaymentWebhooks

router = APIRouter(tags=["Webhooks"])


@cbv(router)
class WebhookRoutes:
    @router.post("/webhooks/paystack")
    @safe_handler
    async def paystack_webhook(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db_async),
    ):
        return await PaymentWebhooks(db=db, request=request).paystack_webhook()
