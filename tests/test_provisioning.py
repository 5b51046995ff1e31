import httpx
import pytest

from rentledger.app import create_app
from rentledger.core.breaker import CircuitBreaker
from rentledger.core.exceptions import GatewayError
from rentledger.fintechs.paystack import PaystackClient, VirtualAccount
from rentledger.services.provisioning_service import (
    Provisioned,
    ProvisioningWorkflow,
    Skipped,
)

JANE = {"tenantName": "Jane", "tenantEmail": "jane@x.com", "tenantPhone": "08031234567"}


async def test_unit_with_full_contact_gets_virtual_account(
    client, headers_a, make_property, make_unit, gateway
):
    prop = await make_property(headers_a)

    unit = await make_unit(headers_a, prop["id"], **JANE)

    assert unit["customerCode"] == "CUS_1"
    assert unit["virtualAccountNumber"] == "0123456789"
    assert unit["virtualAccountBank"] == "Wema Bank"
    assert unit["tenantName"] == "Jane"
    assert gateway.customer_calls == [("jane@x.com", "Jane", "08031234567")]
    assert gateway.account_calls == ["CUS_1"]


async def test_unit_creation_adds_tenant_record(client, headers_a, make_property, make_unit):
    prop = await make_property(headers_a)
    await make_unit(headers_a, prop["id"], **JANE)

    tenants = (await client.get("/api/tenants", headers=headers_a)).json()

    assert [(t["name"], t["email"], t["phoneNumber"]) for t in tenants] == [
        ("Jane", "jane@x.com", "08031234567")
    ]


async def test_gateway_failure_does_not_block_unit(
    client, headers_a, make_property, make_unit, gateway
):
    gateway.fail = True
    prop = await make_property(headers_a)

    unit = await make_unit(headers_a, prop["id"], **JANE)

    assert unit["customerCode"] is None
    assert unit["virtualAccountNumber"] is None
    assert unit["virtualAccountBank"] is None
    tenants = (await client.get("/api/tenants", headers=headers_a)).json()
    assert len(tenants) == 1


async def test_incomplete_contact_skips_gateway(client, headers_a, make_property, make_unit, gateway):
    prop = await make_property(headers_a)

    unit = await make_unit(headers_a, prop["id"], tenantName="Jane", tenantEmail="jane@x.com")

    assert unit["customerCode"] is None
    assert gateway.customer_calls == []


async def test_unit_without_tenant_creates_no_tenant(client, headers_a, make_property, make_unit):
    prop = await make_property(headers_a)
    await make_unit(headers_a, prop["id"])

    assert (await client.get("/api/tenants", headers=headers_a)).json() == []


async def test_reused_customer_code_is_not_bound_twice(
    client, headers_a, make_property, make_unit, gateway
):
    prop = await make_property(headers_a)
    first = await make_unit(headers_a, prop["id"], unit_number="A1", **JANE)

    second = await make_unit(headers_a, prop["id"], unit_number="A2", **JANE)

    assert first["customerCode"] == "CUS_1"
    assert second["customerCode"] is None
    assert second["virtualAccountNumber"] is None
    assert second["unitNumber"] == "A2"
    units = (await client.get("/api/units", headers=headers_a)).json()
    assert sorted(u["unitNumber"] for u in units) == ["A1", "A2"]


async def test_breaker_stops_calling_failing_gateway(
    client, headers_a, make_property, make_unit, gateway
):
    gateway.fail = True
    prop = await make_property(headers_a)

    for n in range(5):
        await make_unit(
            headers_a,
            prop["id"],
            unit_number=f"U{n}",
            tenantName="Jane",
            tenantEmail=f"jane{n}@x.com",
            tenantPhone="08031234567",
        )

    # Threshold is three; later units are created without touching Paystack.
    assert len(gateway.customer_calls) == 3
    units = (await client.get("/api/units", headers=headers_a)).json()
    assert len(units) == 5


class _StubGateway:
    def __init__(self, error=None):
        self.error = error
        self.calls = 0

    async def create_customer(self, email, name, phone):
        self.calls += 1
        if self.error:
            raise self.error
        return "CUS_9"

    async def create_dedicated_account(self, customer_code):
        return VirtualAccount(account_number="9988776655", bank_name="Wema Bank")


@pytest.mark.parametrize(
    "name,email,phone",
    [
        (None, "jane@x.com", "0803"),
        ("Jane", None, "0803"),
        ("Jane", "jane@x.com", None),
        ("", "", ""),
    ],
)
async def test_workflow_skips_incomplete_contact(name, email, phone):
    gateway = _StubGateway()

    result = await ProvisioningWorkflow(gateway).provision(name, email, phone)

    assert result == Skipped("incomplete tenant contact details")
    assert result.status == "skipped"
    assert gateway.calls == 0


async def test_workflow_returns_provisioned():
    result = await ProvisioningWorkflow(_StubGateway()).provision("Jane", "jane@x.com", "0803")

    assert isinstance(result, Provisioned)
    assert result.status == "provisioned"
    assert (result.customer_code, result.account_number, result.bank_name) == (
        "CUS_9",
        "9988776655",
        "Wema Bank",
    )


@pytest.mark.parametrize(
    "error",
    [GatewayError("Paystack /customer failed: boom"), httpx.ConnectError("refused")],
)
async def test_workflow_downgrades_gateway_errors(error, caplog):
    workflow = ProvisioningWorkflow(_StubGateway(error), CircuitBreaker(name="test"))

    result = await workflow.provision("Jane", "jane@x.com", "0803")

    assert isinstance(result, Skipped)
    assert "Could not create virtual account" in caplog.text


@pytest.mark.parametrize(
    "upstream",
    [
        httpx.Response(200, json=["unexpected"]),
        httpx.Response(200, json="maintenance"),
        httpx.Response(503, text="<html>Service Unavailable</html>"),
    ],
)
async def test_unexpected_paystack_answer_still_creates_unit(
    settings, database, identity_provider, headers_a, upstream
):
    paystack = PaystackClient(
        secret_key="sk_test_secret",
        base_url="https://paystack.test",
        transport=httpx.MockTransport(lambda request: upstream),
    )
    app = create_app(
        settings=settings, database=database, gateway=paystack, identity=identity_provider
    )
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        prop = await client.post(
            "/api/properties",
            json={"name": "Sunrise Court", "address": "12 Allen Avenue", "city": "Ikeja", "state": "Lagos"},
            headers=headers_a,
        )
        res = await client.post(
            "/api/units",
            json={"propertyId": prop.json()["id"], "unitNumber": "A1", "rentAmount": "150000", **JANE},
            headers=headers_a,
        )

    assert res.status_code == 201, res.text
    assert res.json()["customerCode"] is None
    assert res.json()["virtualAccountNumber"] is None
