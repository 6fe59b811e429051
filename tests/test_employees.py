"""Tests for employee CRUD endpoints."""

import pytest
from httpx import AsyncClient

NEW_EMPLOYEE = {
    "email": "bob@example.com",
    "name": "Bob Jones",
    "address": "12 Elm Street",
    "cellNumber": "+1 555 0101",
    "roleId": 2,
    "password": "secret123",
}


@pytest.mark.asyncio
async def test_create_employee(async_client: AsyncClient, hr_headers):
    """POST /employees should create a new employee inside the success envelope."""
    resp = await async_client.post("/api/employees", json=NEW_EMPLOYEE, headers=hr_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["statusCode"] == 201
    assert body["message"] == "Employee created successfully"
    assert "timestamp" in body

    data = body["data"]
    assert data["name"] == "Bob Jones"
    assert data["email"] == "bob@example.com"
    assert data["cellNumber"] == "+1 555 0101"
    assert data["roleName"] == "Employee"
    assert data["isActive"] is True
    assert data["id"] is not None
    assert "password" not in data


@pytest.mark.asyncio
async def test_create_duplicate_email_rejected(async_client: AsyncClient, hr_headers):
    """Creating two employees with the same email should fail with 409."""
    await async_client.post("/api/employees", json=NEW_EMPLOYEE, headers=hr_headers)
    resp = await async_client.post(
        "/api/employees",
        json={**NEW_EMPLOYEE, "email": "BOB@example.com", "name": "Bob Two"},
        headers=hr_headers,
    )
    assert resp.status_code == 409
    body = resp.json()
    assert body["success"] is False
    assert body["errorCode"] == 1002


@pytest.mark.asyncio
async def test_create_with_unknown_role(async_client: AsyncClient, hr_headers):
    resp = await async_client.post(
        "/api/employees", json={**NEW_EMPLOYEE, "roleId": 77}, headers=hr_headers
    )
    assert resp.status_code == 400
    assert resp.json()["errorCode"] == 1004
    assert resp.json()["details"] == "Invalid role specified"


@pytest.mark.asyncio
async def test_create_validation_errors_are_field_level(async_client: AsyncClient, hr_headers):
    """Shape errors short-circuit into a 400 ValidationError envelope."""
    resp = await async_client.post(
        "/api/employees",
        json={"email": "not-an-email", "name": "B", "roleId": 0, "password": "123"},
        headers=hr_headers,
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["errorCode"] == 3002
    assert body["message"] == "One or more validation errors occurred."
    errors = body["validationErrors"]
    assert errors["email"] == ["Invalid email format"]
    assert errors["name"] == ["Name must be at least 2 characters"]
    assert "roleId" in errors
    assert "password" in errors


@pytest.mark.asyncio
async def test_create_requires_hr(async_client: AsyncClient, make_employee, auth_headers):
    emp = await make_employee("plain@example.com")
    resp = await async_client.post(
        "/api/employees", json=NEW_EMPLOYEE, headers=auth_headers(emp, "Employee")
    )
    assert resp.status_code == 403
    assert resp.json()["errorCode"] == 2007


@pytest.mark.asyncio
async def test_list_employees_sorted_by_name(async_client: AsyncClient, hr_headers):
    """GET /employees should return all employees ordered by name."""
    for name, email in [("Zoe", "zoe@example.com"), ("Adam", "adam@example.com")]:
        await async_client.post(
            "/api/employees", json={**NEW_EMPLOYEE, "name": name, "email": email}, headers=hr_headers
        )
    resp = await async_client.get("/api/employees", headers=hr_headers)
    assert resp.status_code == 200
    body = resp.json()
    names = [e["name"] for e in body["data"]]
    assert names == sorted(names)
    assert len(names) == 3  # two new + seeded HR account
    assert body["message"] == "3 employees retrieved successfully"


@pytest.mark.asyncio
async def test_list_employees_forbidden_for_employee(
    async_client: AsyncClient, make_employee, auth_headers
):
    emp = await make_employee("lister@example.com")
    resp = await async_client.get("/api/employees", headers=auth_headers(emp, "Employee"))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_employee_reads_own_record(async_client: AsyncClient, make_employee, auth_headers):
    emp = await make_employee("me@example.com", name="Solo")
    resp = await async_client.get(f"/api/employees/{emp.id}", headers=auth_headers(emp, "Employee"))
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Solo"


@pytest.mark.asyncio
async def test_employee_cannot_read_someone_else(
    async_client: AsyncClient, make_employee, auth_headers
):
    emp = await make_employee("first@example.com")
    other = await make_employee("second@example.com")
    resp = await async_client.get(f"/api/employees/{emp.id}", headers=auth_headers(other, "Employee"))
    assert resp.status_code == 403
    body = resp.json()
    assert body["errorCode"] == 2007
    assert body["message"] == "You do not have permission to access this resource."


@pytest.mark.asyncio
async def test_hr_reads_any_record(async_client: AsyncClient, make_employee, hr_headers):
    emp = await make_employee("someone@example.com")
    resp = await async_client.get(f"/api/employees/{emp.id}", headers=hr_headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_get_employee_not_found(async_client: AsyncClient, hr_headers):
    """Requesting a non-existent employee should return 404."""
    resp = await async_client.get("/api/employees/9999", headers=hr_headers)
    assert resp.status_code == 404
    assert resp.json()["errorCode"] == 1001


@pytest.mark.asyncio
async def test_update_employee(async_client: AsyncClient, hr_headers):
    """PUT /employees/{id} should update only the fields sent."""
    create = await async_client.post("/api/employees", json=NEW_EMPLOYEE, headers=hr_headers)
    eid = create.json()["data"]["id"]
    resp = await async_client.put(
        f"/api/employees/{eid}", json={"name": "New Name"}, headers=hr_headers
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["name"] == "New Name"
    assert data["address"] == "12 Elm Street"


@pytest.mark.asyncio
async def test_self_update_cannot_promote(async_client: AsyncClient, make_employee, auth_headers):
    emp = await make_employee("ambitious@example.com")
    resp = await async_client.put(
        f"/api/employees/{emp.id}",
        json={"address": "New Address", "roleId": 1, "isActive": False},
        headers=auth_headers(emp, "Employee"),
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["address"] == "New Address"
    assert data["roleId"] == 2
    assert data["isActive"] is True


@pytest.mark.asyncio
async def test_update_someone_else_forbidden(async_client: AsyncClient, make_employee, auth_headers):
    emp = await make_employee("mine@example.com")
    other = await make_employee("yours@example.com")
    resp = await async_client.put(
        f"/api/employees/{emp.id}", json={"name": "Stolen"}, headers=auth_headers(other, "Employee")
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_delete_employee(async_client: AsyncClient, hr_headers):
    """DELETE /employees/{id} should remove the employee."""
    create = await async_client.post("/api/employees", json=NEW_EMPLOYEE, headers=hr_headers)
    eid = create.json()["data"]["id"]
    resp = await async_client.delete(f"/api/employees/{eid}", headers=hr_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == f"Employee with ID {eid} deleted successfully"
    assert body["data"] is None

    gone = await async_client.get(f"/api/employees/{eid}", headers=hr_headers)
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_employee(async_client: AsyncClient, hr_headers):
    resp = await async_client.delete("/api/employees/4242", headers=hr_headers)
    assert resp.status_code == 404
    assert resp.json()["errorCode"] == 1001


@pytest.mark.asyncio
async def test_delete_own_record_forbidden_for_employee(
    async_client: AsyncClient, make_employee, auth_headers
):
    emp = await make_employee("quitter@example.com")
    resp = await async_client.delete(f"/api/employees/{emp.id}", headers=auth_headers(emp, "Employee"))
    assert resp.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["a" * 129, "a" * 5000])
async def test_create_with_overlong_password(async_client: AsyncClient, hr_headers, password):
    resp = await async_client.post(
        "/api/employees", json={**NEW_EMPLOYEE, "password": password}, headers=hr_headers
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["errorCode"] == 3002
    assert "password" in body["validationErrors"]


@pytest.mark.asyncio
async def test_create_with_longest_password(async_client: AsyncClient, hr_headers):
    resp = await async_client.post(
        "/api/employees", json={**NEW_EMPLOYEE, "password": "a" * 128}, headers=hr_headers
    )
    assert resp.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["Employee", "HR"])
@pytest.mark.parametrize("employee_id", ["0", "-3", "abc", "2147483648"])
async def test_malformed_id_is_validation_error_for_every_role(
    async_client: AsyncClient, make_employee, auth_headers, role, employee_id
):
    """A bad path id is rejected before the access policy is evaluated."""
    emp = await make_employee("anyrole@example.com")
    resp = await async_client.get(f"/api/employees/{employee_id}", headers=auth_headers(emp, role))
    assert resp.status_code == 400
    body = resp.json()
    assert body["errorCode"] == 3002
    assert "employee_id" in body["validationErrors"]


@pytest.mark.asyncio
async def test_malformed_id_still_requires_token(async_client: AsyncClient):
    resp = await async_client.get("/api/employees/0")
    assert resp.status_code == 401
    assert resp.json()["errorCode"] == 2003


@pytest.mark.asyncio
async def test_unsupported_method_uses_catalogued_code(async_client: AsyncClient, hr_headers):
    resp = await async_client.patch("/api/employees/1", json={"name": "Nope"}, headers=hr_headers)
    assert resp.status_code == 405
    body = resp.json()
    assert body["statusCode"] == 405
    assert body["errorCode"] == 3007
