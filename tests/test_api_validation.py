from decimal import Decimal

import pytest


async def test_health(client):
    res = await client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


@pytest.mark.parametrize(
    "rent", ["abc", "-5", 0, None, "NaN", "0.001", "150000.005", "1000000000000", "1e13"]
)
async def test_invalid_rent_amount_names_field(client, headers_a, make_property, rent):
    prop = await make_property(headers_a)

    res = await client.post(
        "/api/units",
        json={"propertyId": prop["id"], "unitNumber": "A1", "rentAmount": rent},
        headers=headers_a,
    )

    assert res.status_code == 422
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "ValidationError"
    assert body["field"] == "rentAmount"


async def test_missing_property_field(client, headers_a):
    res = await client.post(
        "/api/properties",
        json={"address": "12 Allen Avenue", "city": "Ikeja", "state": "Lagos"},
        headers=headers_a,
    )

    assert res.status_code == 422
    assert res.json()["field"] == "name"


async def test_blank_property_name_is_rejected(client, headers_a):
    res = await client.post(
        "/api/properties",
        json={"name": "   ", "address": "12 Allen Avenue", "city": "Ikeja", "state": "Lagos"},
        headers=headers_a,
    )

    assert res.status_code == 422
    assert res.json()["field"] == "name"


async def test_negative_security_deposit(client, headers_a):
    res = await client.post(
        "/api/leases",
        json={
            "tenantId": "t",
            "unitId": "u",
            "startDate": "2026-01-01",
            "endDate": "2026-12-31",
            "monthlyRent": "1000",
            "securityDeposit": "-1",
        },
        headers=headers_a,
    )

    assert res.status_code == 422
    assert res.json()["field"] == "securityDeposit"


async def test_invalid_tenant_email(client, headers_a):
    res = await client.post(
        "/api/tenants", json={"name": "Jane", "email": "not-an-email"}, headers=headers_a
    )

    assert res.status_code == 422
    assert res.json()["field"] == "email"


async def test_manual_payment_defaults(client, headers_a, make_property, make_unit):
    prop = await make_property(headers_a)
    unit = await make_unit(headers_a, prop["id"])

    res = await client.post(
        "/api/payments", json={"unitId": unit["id"], "amount": "75000.50"}, headers=headers_a
    )

    assert res.status_code == 201
    payment = res.json()
    assert payment["reference"].startswith("REF-")
    assert payment["status"] == "success"
    assert payment["paidAt"]


async def test_manual_payment_reference_replay(client, headers_a, headers_b, make_property, make_unit):
    prop_a = await make_property(headers_a)
    unit_a = await make_unit(headers_a, prop_a["id"])
    prop_b = await make_property(headers_b, name="Harbour View")
    unit_b = await make_unit(headers_b, prop_b["id"])
    body = {"unitId": unit_a["id"], "amount": "5000", "reference": "BANK-TX-77", "date": "2026-03-01T10:00:00Z"}

    first = await client.post("/api/payments", json=body, headers=headers_a)
    replay = await client.post("/api/payments", json=body, headers=headers_a)
    clash = await client.post(
        "/api/payments",
        json={**body, "unitId": unit_b["id"]},
        headers=headers_b,
    )

    assert first.status_code == replay.status_code == 201
    assert replay.json()["id"] == first.json()["id"]
    assert clash.status_code == 422
    assert clash.json()["field"] == "reference"
    assert len((await client.get("/api/payments", headers=headers_a)).json()) == 1
    assert (await client.get("/api/payments", headers=headers_b)).json() == []


async def test_payment_lookup_by_id(client, headers_a, headers_b, make_property, make_unit):
    prop = await make_property(headers_a)
    unit = await make_unit(headers_a, prop["id"])
    created = await client.post(
        "/api/payments", json={"unitId": unit["id"], "amount": "5000"}, headers=headers_a
    )
    payment_id = created.json()["id"]

    own = await client.get(f"/api/payments/{payment_id}", headers=headers_a)
    foreign = await client.get(f"/api/payments/{payment_id}", headers=headers_b)

    assert own.status_code == 200
    assert own.json()["unit"]["unitNumber"] == "A1"
    assert foreign.status_code == 404


async def test_maintenance_unit_must_belong_to_property(
    client, headers_a, make_property, make_unit
):
    first = await make_property(headers_a)
    second = await make_property(headers_a, name="Harbour View")
    unit = await make_unit(headers_a, second["id"])
    body = {
        "propertyId": first["id"],
        "unitId": unit["id"],
        "title": "Leaking tap",
        "description": "Kitchen tap drips all night",
        "priority": "High",
    }

    mismatched = await client.post("/api/maintenance", json=body, headers=headers_a)
    ok = await client.post(
        "/api/maintenance", json={**body, "propertyId": second["id"]}, headers=headers_a
    )

    assert mismatched.status_code == 404
    assert ok.status_code == 201
    assert ok.json()["status"] == "Pending"
    listing = (await client.get("/api/maintenance", headers=headers_a)).json()
    assert [(m["title"], m["property"]["name"], m["unit"]["unitNumber"]) for m in listing] == [
        ("Leaking tap", "Harbour View", "A1")
    ]


async def test_maintenance_invalid_priority(client, headers_a, make_property):
    prop = await make_property(headers_a)

    res = await client.post(
        "/api/maintenance",
        json={"propertyId": prop["id"], "title": "Gate", "description": "Broken", "priority": "Urgent"},
        headers=headers_a,
    )

    assert res.status_code == 422
    assert res.json()["field"] == "priority"


@pytest.mark.parametrize(
    "field,value",
    [
        ("monthlyRent", "0.001"),
        ("monthlyRent", "10000000000000"),
        ("securityDeposit", "0.005"),
    ],
)
async def test_lease_money_fields_match_column_precision(client, headers_a, field, value):
    body = {
        "tenantId": "t",
        "unitId": "u",
        "startDate": "2026-01-01",
        "endDate": "2026-12-31",
        "monthlyRent": "1000",
    }
    body[field] = value

    res = await client.post("/api/leases", json=body, headers=headers_a)

    assert res.status_code == 422
    assert res.json()["field"] == field


async def test_sub_kobo_payment_is_rejected(client, headers_a, make_property, make_unit):
    prop = await make_property(headers_a)
    unit = await make_unit(headers_a, prop["id"])

    res = await client.post(
        "/api/payments", json={"unitId": unit["id"], "amount": "1.999"}, headers=headers_a
    )

    assert res.status_code == 422
    assert res.json()["field"] == "amount"
    assert (await client.get("/api/payments", headers=headers_a)).json() == []


async def test_two_decimal_rent_is_kept_exactly(client, headers_a, make_property):
    prop = await make_property(headers_a)

    res = await client.post(
        "/api/units",
        json={"propertyId": prop["id"], "unitNumber": "A1", "rentAmount": "150000.50"},
        headers=headers_a,
    )

    assert res.status_code == 201
    assert Decimal(str(res.json()["rentAmount"])) == Decimal("150000.50")
