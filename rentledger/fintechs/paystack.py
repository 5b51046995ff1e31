import hashlib
import hmac
import logging
from dataclasses import dataclass

import httpx

from rentledger.core.exceptions import GatewayError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VirtualAccount:
    account_number: str
    bank_name: str


class PaystackClient:
    """
    Outbound client for Paystack's customer and dedicated-account APIs.

    Every method is a single request with no retry. Composition of the two
    calls, and any retry policy, belongs to the provisioning workflow.
    """

    BASE_URL = "https://api.paystack.co"

    def __init__(
        self,
        secret_key: str | None,
        base_url: str | None = None,
        preferred_bank: str = "wema-bank",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.secret = secret_key or ""
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.preferred_bank = preferred_bank
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Authorization": f"Bearer {self.secret}",
            "Content-Type": "application/json",
        }

    async def _post(self, path: str, payload: dict) -> dict:
        url = f"{self.base_url}{path}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                res = await client.post(url, headers=self.headers, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Paystack request to {path} failed: {e}")
            raise GatewayError(f"Paystack unreachable: {e}") from e

        try:
            body = res.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if res.is_error or not body.get("status"):
            message = body.get("message") or res.text or f"HTTP {res.status_code}"
            logger.error(f"Paystack {path} error ({res.status_code}): {message}")
            raise GatewayError(f"Paystack {path} failed: {message}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise GatewayError(f"Paystack {path} returned no data")

        return data

    async def create_customer(self, email: str, name: str, phone: str) -> str:
        data = await self._post(
            "/customer",
            {"email": email, "first_name": name, "phone": phone},
        )

        customer_code = data.get("customer_code")
        if not customer_code:
            raise GatewayError("Paystack /customer response missing customer_code")

        return customer_code

    async def create_dedicated_account(self, customer_code: str) -> VirtualAccount:
        data = await self._post(
            "/dedicated_account",
            {"customer": customer_code, "preferred_bank": self.preferred_bank},
        )

        account_number = data.get("account_number")
        bank = data.get("bank") or {}
        bank_name = bank.get("name") if isinstance(bank, dict) else None

        if not account_number or not bank_name:
            raise GatewayError(
                "Paystack /dedicated_account response missing account details"
            )

        return VirtualAccount(account_number=str(account_number), bank_name=bank_name)

    def verify_signature(self, signature: str | None, body: bytes) -> bool:
        if not signature or not self.secret:
            return False

        expected = hmac.new(self.secret.encode(), body, hashlib.sha512).hexdigest()

        return hmac.compare_digest(expected, signature)
