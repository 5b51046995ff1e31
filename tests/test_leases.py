import pytest
from sqlalchemy import select

from rentledger.models.enums import LeaseStatus
from rentledger.models.models import Lease, Unit


def lease_body(tenant_id, unit_id, **overrides):
    body = {
        "tenantId": tenant_id,
        "unitId": unit_id,
        "startDate": "2026-01-01",
        "endDate": "2026-12-31",
        "monthlyRent": "150000",
        "securityDeposit": "300000",
    }
    body.update(overrides)
    return body


@pytest.fixture
async def unit_and_tenant(headers_a, make_property, make_unit, make_tenant):
    prop = await make_property(headers_a)
    unit = await make_unit(headers_a, prop["id"], tenantName="Old Occupant")
    tenant = await make_tenant(headers_a, name="Jane Okafor", email="jane.tenant@x.com")
    return unit, tenant


async def test_lease_overwrites_unit_snapshot(client, headers_a, unit_and_tenant):
    unit, tenant = unit_and_tenant

    res = await client.post(
        "/api/leases", json=lease_body(tenant["id"], unit["id"]), headers=headers_a
    )

    assert res.status_code == 201
    lease = res.json()
    assert lease["status"] == "Active"
    assert lease["tenantId"] == tenant["id"]

    refreshed = (await client.get(f"/api/units/{unit['id']}", headers=headers_a)).json()
    assert refreshed["tenantName"] == "Jane Okafor"
    assert refreshed["tenantEmail"] == "jane.tenant@x.com"
    assert refreshed["tenantPhone"] == "08031234567"


async def test_new_lease_terminates_previous_one(client, headers_a, make_tenant, unit_and_tenant):
    unit, tenant = unit_and_tenant
    second_tenant = await make_tenant(headers_a, name="Musa Bello", email="musa@x.com")

    first = await client.post(
        "/api/leases", json=lease_body(tenant["id"], unit["id"]), headers=headers_a
    )
    second = await client.post(
        "/api/leases",
        json=lease_body(second_tenant["id"], unit["id"], startDate="2027-01-01", endDate="2027-12-31"),
        headers=headers_a,
    )

    old = (await client.get(f"/api/leases/{first.json()['id']}", headers=headers_a)).json()
    new = (await client.get(f"/api/leases/{second.json()['id']}", headers=headers_a)).json()
    assert old["status"] == "Terminated"
    assert new["status"] == "Active"

    refreshed = (await client.get(f"/api/units/{unit['id']}", headers=headers_a)).json()
    assert refreshed["tenantName"] == "Musa Bello"


async def test_terminated_lease_leaves_current_one(client, headers_a, unit_and_tenant):
    unit, tenant = unit_and_tenant
    current = await client.post(
        "/api/leases", json=lease_body(tenant["id"], unit["id"]), headers=headers_a
    )

    await client.post(
        "/api/leases",
        json=lease_body(tenant["id"], unit["id"], status="Terminated", startDate="2024-01-01", endDate="2024-12-31"),
        headers=headers_a,
    )

    lease = (await client.get(f"/api/leases/{current.json()['id']}", headers=headers_a)).json()
    assert lease["status"] == "Active"


async def test_lease_listing_includes_tenant_and_property(client, headers_a, unit_and_tenant):
    unit, tenant = unit_and_tenant
    await client.post("/api/leases", json=lease_body(tenant["id"], unit["id"]), headers=headers_a)

    leases = (await client.get("/api/leases", headers=headers_a)).json()

    assert len(leases) == 1
    assert leases[0]["tenant"]["name"] == "Jane Okafor"
    assert leases[0]["unit"]["property"]["name"] == "Sunrise Court"

    tenant_view = (await client.get(f"/api/tenants/{tenant['id']}", headers=headers_a)).json()
    assert [l["unit"]["unitNumber"] for l in tenant_view["leases"]] == ["A1"]


async def test_end_before_start_is_rejected(client, headers_a, unit_and_tenant):
    unit, tenant = unit_and_tenant

    res = await client.post(
        "/api/leases",
        json=lease_body(tenant["id"], unit["id"], startDate="2026-06-01", endDate="2026-05-31"),
        headers=headers_a,
    )

    assert res.status_code == 422
    assert res.json()["field"] == "endDate"
    assert (await client.get("/api/leases", headers=headers_a)).json() == []


async def test_unknown_unit_is_not_found(client, headers_a, unit_and_tenant):
    _, tenant = unit_and_tenant

    res = await client.post(
        "/api/leases", json=lease_body(tenant["id"], "no-such-unit"), headers=headers_a
    )

    assert res.status_code == 404
    assert res.json()["detail"] == "Unit not found"


async def test_failed_snapshot_write_rolls_back_lease(
    client, headers_a, make_tenant, unit_and_tenant, database, monkeypatch
):
    unit, tenant = unit_and_tenant
    first = await client.post(
        "/api/leases", json=lease_body(tenant["id"], unit["id"]), headers=headers_a
    )
    newcomer = await make_tenant(headers_a, name="Musa Bello", email="musa@x.com")

    original = Unit.apply_tenant_snapshot

    def broken_snapshot(self, name, email, phone):
        original(self, name, email, phone)
        # NOT NULL column: the unit UPDATE fails inside the lease transaction.
        self.unit_number = None

    monkeypatch.setattr(Unit, "apply_tenant_snapshot", broken_snapshot)

    res = await client.post(
        "/api/leases",
        json=lease_body(newcomer["id"], unit["id"], startDate="2027-01-01", endDate="2027-12-31"),
        headers=headers_a,
    )
    monkeypatch.undo()

    assert res.status_code == 500
    async with database.session() as session:
        leases = (await session.execute(select(Lease))).scalars().all()
    assert [l.id for l in leases] == [first.json()["id"]]
    assert leases[0].status == LeaseStatus.ACTIVE

    refreshed = (await client.get(f"/api/units/{unit['id']}", headers=headers_a)).json()
    assert refreshed["tenantName"] == "Jane Okafor"
    assert refreshed["unitNumber"] == "A1"
