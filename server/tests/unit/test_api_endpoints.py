"""Integration tests for API endpoints."""

import re

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from travel_experts.main import create_app
from travel_experts.models import Booking, Customer


@pytest.mark.asyncio
async def test_list_packages_endpoint(test_client, catalog_packages):
    """Test the package listing endpoint."""
    response = await test_client.get("/api/packages")

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert [p["PkgName"] for p in data["data"]] == ["Caribbean New Year", "Polynesian Paradise"]

    caribbean = data["data"][0]
    assert caribbean["Started"] is True
    assert caribbean["PackageId"] == catalog_packages["Caribbean New Year"]
    assert caribbean["PkgBasePrice"] == 4800.0
    assert set(caribbean) == {
        "PackageId", "PkgName", "PkgStartDate", "PkgEndDate", "PkgDesc",
        "PkgBasePrice", "PkgAgencyCommission", "Started",
    }


@pytest.mark.asyncio
async def test_list_agencies_endpoint(test_client, agencies_with_staff):
    """Test the agency listing endpoint nests agents."""
    response = await test_client.get("/api/agencies")

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert [a["AgencyId"] for a in data["data"]] == [1, 2, 3]
    assert data["data"][2]["Agents"] == []

    agent = data["data"][1]["Agents"][0]
    assert agent == {
        "AgentId": 5,
        "AgtFirstName": "Bruce",
        "AgtLastName": "Dahl",
        "AgtBusPhone": "4032102257",
        "AgtEmail": "bruce.dahl@travelexperts.com",
    }


@pytest.mark.asyncio
async def test_create_booking_endpoint(test_client, bali_package, sample_booking_data):
    """Test the booking endpoint echoes the confirmation."""
    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True

    booking = data["booking"]
    assert re.match(r"^[A-Z0-9]{6}$", booking["BookingNo"])
    assert booking["PkgName"] == "Bali Escape"
    assert booking["TravelerCount"] == 2
    assert booking["CustFirstName"] == "Ann"
    assert booking["CustLastName"] == "Lee"
    assert booking["CustEmail"] == "a@x.com"
    assert "BookingDate" in booking
    assert "customer_id" not in booking


@pytest.mark.asyncio
async def test_create_order_alias_endpoint(test_client, bali_package, sample_booking_data):
    """Test the order form path places a booking as well."""
    sample_booking_data["TravelerCount"] = "3"
    sample_booking_data["PackageId"] = "7"

    response = await test_client.post("/api/orders", json=sample_booking_data)

    assert response.status_code == 200
    assert response.json()["booking"]["TravelerCount"] == 3


@pytest.mark.asyncio
async def test_create_booking_form_package_name(test_client, test_session, bali_package):
    """Test the order form's `package` field resolves by name."""
    response = await test_client.post(
        "/api/bookings",
        json={
            "CustFirstName": "Ann",
            "CustLastName": "Lee",
            "CustEmail": "a@x.com",
            "package": "Bali Escape",
            "TravelerCount": "",
        },
    )

    assert response.status_code == 200
    assert response.json()["booking"]["TravelerCount"] == 1
    assert await test_session.scalar(select(func.count()).select_from(Booking)) == 1


@pytest.mark.asyncio
async def test_create_booking_package_not_found(test_client, test_session, bali_package, sample_booking_data):
    """Test an unknown package is a 404 and nothing is written."""
    sample_booking_data["PackageId"] = 999

    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 404
    data = response.json()
    assert data["ok"] is False
    assert "not found" in data["message"].lower()
    assert await test_session.scalar(select(func.count()).select_from(Customer)) == 0
    assert await test_session.scalar(select(func.count()).select_from(Booking)) == 0


@pytest.mark.asyncio
async def test_create_booking_missing_fields(test_client, test_session, bali_package):
    """Test a booking without identity fields is a 400."""
    response = await test_client.post("/api/bookings", json={"PackageId": 7})

    assert response.status_code == 400
    data = response.json()
    assert data["ok"] is False
    assert data["error"] == "BAD_REQUEST"
    assert set(data["fields"]) == {"CustFirstName", "CustLastName", "CustEmail"}
    assert await test_session.scalar(select(func.count()).select_from(Customer)) == 0


@pytest.mark.asyncio
async def test_create_booking_malformed_body(test_client):
    """Test an undecodable body is answered with the 400 envelope."""
    response = await test_client.post(
        "/api/bookings",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["ok"] is False
    assert data["error"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_register_endpoint(test_client, test_session, sample_registration_data):
    """Test the registration endpoint."""
    response = await test_client.post("/api/register", json=sample_registration_data)

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "Registration successful!"}
    assert await test_session.scalar(select(func.count()).select_from(Customer)) == 1


@pytest.mark.asyncio
async def test_register_endpoint_missing_fields(test_client):
    """Test registration without an email is a 400."""
    response = await test_client.post(
        "/api/register",
        json={"CustFirstName": "Ann", "CustLastName": "Lee"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["ok"] is False
    assert data["message"] == "Missing required fields"


@pytest.mark.asyncio
async def test_register_endpoint_rejects_oversized_province(test_client, sample_registration_data):
    """Test a field longer than its column is rejected before any insert."""
    sample_registration_data["CustProv"] = "Alberta"

    response = await test_client.post("/api/register", json=sample_registration_data)

    assert response.status_code == 400
    assert "CustProv" in response.json()["fields"]


@pytest.mark.asyncio
async def test_ready_endpoint_pings_database(test_engine):
    """Test readiness reports the database check."""
    app = create_app()
    app.state.engine = test_engine

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "ok"


@pytest.mark.asyncio
async def test_create_booking_unicode_digit_package_id(test_client, test_session, bali_package, sample_booking_data):
    """Test a non-ASCII digit package id is a 404 rather than a server error."""
    sample_booking_data["PackageId"] = "²"

    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 404
    assert response.json()["error"] == "PACKAGE_NOT_FOUND"
    assert await test_session.scalar(select(func.count()).select_from(Customer)) == 0


@pytest.mark.asyncio
async def test_create_booking_store_failure_rolls_back(
    test_client, test_session, bali_package, sample_booking_data, drop_table
):
    """Test a failed booking insert after the customer insert leaves no customer behind."""
    await drop_table("bookings")

    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 500
    data = response.json()
    assert data["ok"] is False
    assert data["error"] == "DB_ERROR_ORDER"
    assert data["message"] == "Order failed"
    assert "error_id" in data
    assert await test_session.scalar(select(func.count()).select_from(Customer)) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path,table,code",
    [
        ("/api/packages", "packages", "DB_ERROR_PACKAGES"),
        ("/api/agencies", "agents", "DB_ERROR_AGENCIES"),
    ],
)
async def test_catalog_store_failure(test_client, drop_table, path, table, code):
    """Test catalog listings answer a failed query with the store error envelope."""
    await drop_table(table)

    response = await test_client.get(path)

    assert response.status_code == 500
    data = response.json()
    assert data["ok"] is False
    assert data["error"] == code
    assert "error_id" in data
    assert "data" not in data


@pytest.mark.asyncio
async def test_register_store_failure(test_client, sample_registration_data, drop_table):
    """Test registration answers a failed insert with the store error envelope."""
    await drop_table("customers")

    response = await test_client.post("/api/register", json=sample_registration_data)

    assert response.status_code == 500
    data = response.json()
    assert data["ok"] is False
    assert data["error"] == "DB_ERROR_REGISTER"
    assert data["message"] == "Database insert failed"
    assert "laetia@example.com" not in response.text
