import json
import logging

from fastapi import HTTPException, Request

from rentledger.fintechs.paystack import PaystackClient
from rentledger.models.enums import ReconciliationOutcome
from rentledger.schemas.schema import WebhookAck
from rentledger.services.reconciliation_service import ReconciliationService

logger = logging.getLogger(__name__)


class PaymentWebhooks:
    def __init__(self, db, request: Request):
        self.request = request
        self.settings = request.app.state.settings
        self.paystack: PaystackClient = request.app.state.gateway
        self.reconciliation: ReconciliationService = ReconciliationService(db)

    async def paystack_webhook(self) -> WebhookAck:
        raw_body = await self.request.body()

        if self.settings.PAYSTACK_VERIFY_WEBHOOK_SIGNATURE:
            signature = self.request.headers.get("x-paystack-signature")
            if not self.paystack.verify_signature(signature, raw_body):
                raise HTTPException(401, "Invalid signature")

        try:
            payload = json.loads(raw_body)
        except (ValueError, UnicodeDecodeError):
            logger.warning("Paystack webhook body is not valid JSON")
            return WebhookAck(status="received")

        outcome: ReconciliationOutcome = await self.reconciliation.handle_event(payload)
        logger.info(f"Paystack webhook handled: {outcome.value}")
        return WebhookAck(status="received")
