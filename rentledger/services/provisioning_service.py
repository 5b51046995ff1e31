"""
Best-effort virtual account issuance for a new unit's tenant.

A unit must be creatable while the payment gateway is down, so every
gateway failure becomes a ``Skipped`` result and a logged warning instead
of an exception. Callers branch on the result type.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Union

import httpx

from rentledger.core.breaker import CircuitBreaker, CircuitOpenError
from rentledger.core.exceptions import GatewayError
from rentledger.fintechs.paystack import VirtualAccount

logger = logging.getLogger(__name__)


class PaymentGateway(Protocol):
    async def create_customer(self, email: str, name: str, phone: str) -> str: ...

    async def create_dedicated_account(self, customer_code: str) -> VirtualAccount: ...


@dataclass(frozen=True)
class Provisioned:
    customer_code: str
    account_number: str
    bank_name: str

    status = "provisioned"


@dataclass(frozen=True)
class Skipped:
    reason: str

    status = "skipped"


ProvisioningResult = Union[Provisioned, Skipped]


class ProvisioningWorkflow:
    def __init__(self, gateway: PaymentGateway, breaker: Optional[CircuitBreaker] = None):
        self.gateway = gateway
        self.breaker = breaker or CircuitBreaker(name="paystack")

    async def provision(
        self,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
    ) -> ProvisioningResult:
        if not (name and email and phone):
            return Skipped("incomplete tenant contact details")

        try:
            customer_code = await self.breaker.call(
                self.gateway.create_customer, email, name, phone
            )
            account: VirtualAccount = await self.breaker.call(
                self.gateway.create_dedicated_account, customer_code
            )
        except (GatewayError, CircuitOpenError, httpx.HTTPError) as e:
            logger.warning(
                f"Could not create virtual account for {email}, continuing without it: {e}"
            )
            return Skipped(str(e))

        return Provisioned(
            customer_code=customer_code,
            account_number=account.account_number,
            bank_name=account.bank_name,
        )
