"""Pytest fixtures for the rent ledger API tests."""

from __future__ import annotations

from typing import AsyncGenerator, Dict, List, Optional

import httpx
import pytest

from rentledger.app import create_app
from rentledger.core.database import Database
from rentledger.core.exceptions import GatewayError, InvalidToken
from rentledger.core.settings import Settings
from rentledger.fintechs.paystack import VirtualAccount
from rentledger.identity.supabase import AuthIdentity

TOKEN_A = "token-landlord-a"
TOKEN_B = "token-landlord-b"


class FakeIdentityProvider:
    """Accepts a fixed set of tokens; anything else is rejected."""

    def __init__(self, identities: Dict[str, AuthIdentity]):
        self.identities = dict(identities)
        self.calls: List[str] = []

    async def verify(self, token: str) -> AuthIdentity:
        self.calls.append(token)
        identity = self.identities.get(token)
        if identity is None:
            raise InvalidToken()
        return identity


class FakeGateway:
    """
    In-memory stand-in for Paystack. Like the real service it hands back the
    same customer code when an email is registered twice.
    """

    def __init__(self):
        self.fail = False
        self.customer_calls: List[tuple] = []
        self.account_calls: List[str] = []
        self.codes: Dict[str, str] = {}

    async def create_customer(self, email: str, name: str, phone: str) -> str:
        self.customer_calls.append((email, name, phone))
        if self.fail:
            raise GatewayError("Paystack /customer failed: service unavailable")
        if email not in self.codes:
            self.codes[email] = f"CUS_{len(self.codes) + 1}"
        return self.codes[email]

    async def create_dedicated_account(self, customer_code: str) -> VirtualAccount:
        self.account_calls.append(customer_code)
        if self.fail:
            raise GatewayError("Paystack /dedicated_account failed: service unavailable")
        return VirtualAccount(account_number="0123456789", bank_name="Wema Bank")

    def verify_signature(self, signature: Optional[str], body: bytes) -> bool:
        return False


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path}/test.db",
        PAYSTACK_SECRET_KEY="sk_test_secret",
        PAYSTACK_VERIFY_WEBHOOK_SIGNATURE=False,
        IDENTITY_PROVIDER_URL="https://auth.example.test",
    )


@pytest.fixture
async def database(settings) -> AsyncGenerator[Database, None]:
    db = Database(settings.DATABASE_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider(
        {
            TOKEN_A: AuthIdentity(subject="landlord-a", email="jane@x.com"),
            TOKEN_B: AuthIdentity(subject="landlord-b", email="bola@x.com"),
        }
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def app(settings, database, gateway, identity_provider):
    return create_app(
        settings=settings,
        database=database,
        gateway=gateway,
        identity=identity_provider,
    )


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def headers_a() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN_A}"}


@pytest.fixture
def headers_b() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN_B}"}


@pytest.fixture
def make_property(client):
    async def _make(headers, name="Sunrise Court"):
        res = await client.post(
            "/api/properties",
            json={"name": name, "address": "12 Allen Avenue", "city": "Ikeja", "state": "Lagos"},
            headers=headers,
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _make


@pytest.fixture
def make_unit(client):
    async def _make(headers, property_id, unit_number="A1", **tenant):
        body = {"propertyId": property_id, "unitNumber": unit_number, "rentAmount": "150000"}
        body.update(tenant)
        res = await client.post("/api/units", json=body, headers=headers)
        assert res.status_code == 201, res.text
        return res.json()

    return _make


@pytest.fixture
def make_tenant(client):
    async def _make(headers, name="Jane Okafor", email="jane.tenant@x.com"):
        res = await client.post(
            "/api/tenants",
            json={"name": name, "email": email, "phoneNumber": "08031234567"},
            headers=headers,
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _make
