import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from rentledger.core.exceptions import InvalidToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthIdentity:
    subject: str
    email: Optional[str]


class IdentityProviderClient:
    """
    Verifies bearer tokens against a Supabase-compatible auth server.

    One ``GET /auth/v1/user`` per call; results are never cached so that
    revoked or expired tokens are rejected on the next request.
    """

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.timeout = timeout
        self.transport = transport

    async def verify(self, token: str) -> AuthIdentity:
        if not self.base_url:
            logger.error("Identity provider URL is not configured")
            raise InvalidToken()

        url = f"{self.base_url}/auth/v1/user"
        headers = {"Authorization": f"Bearer {token}", "apikey": self.api_key}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                res = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Identity provider unreachable: {e}")
            raise InvalidToken() from e

        if res.status_code != 200:
            if res.status_code not in (401, 403):
                logger.warning(
                    f"Identity provider answered {res.status_code} while verifying a token"
                )
            raise InvalidToken()

        try:
            user = res.json()
        except ValueError:
            raise InvalidToken()

        subject = user.get("id") if isinstance(user, dict) else None
        if not subject:
            raise InvalidToken()

        return AuthIdentity(subject=str(subject), email=user.get("email"))
