import pytest

from core.security import create_session_token


@pytest.mark.anyio
async def test_login(async_client):
    """Login returns the identity and a session token"""
    resp = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "admin@company.com", "password": "admin123"}
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["token"]
    assert data["user"]["id"] == "USR-ADMIN"
    assert data["user"]["role"] == "admin"
    assert data["user"]["employeeId"] == "EMP-ADMIN"
    assert "hashedPassword" not in data["user"]


@pytest.mark.anyio
async def test_login_invalid_credentials(async_client):
    """Test login with wrong password"""
    resp = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "admin@company.com", "password": "wrongpassword"}
    )
    assert resp.status_code == 401
    assert "Invalid email or password" in resp.json()["detail"]


@pytest.mark.anyio
async def test_login_nonexistent_user(async_client):
    resp = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@company.com", "password": "password"}
    )
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_get_current_user(async_client, user_headers):
    resp = await async_client.get("/api/v1/auth/me", headers=user_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["email"] == "jane.doe@company.com"
    assert data["role"] == "user"
    assert data["employeeId"] == "EMP-001"


@pytest.mark.anyio
async def test_get_current_user_unauthorized(async_client):
    """Test getting current user without authentication"""
    resp = await async_client.get("/api/v1/auth/me")
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_invalid_token_rejected(async_client):
    resp = await async_client.get(
        "/api/v1/auth/me",
        headers={"Authorization": "Bearer invalid.token.here"}
    )
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_legacy_session_header_accepted(async_client, user_token):
    resp = await async_client.get("/api/v1/auth/me", headers={"X-Session-Token": user_token})
    assert resp.status_code == 200, resp.text
    assert resp.json()["id"] == "USR-001"


@pytest.mark.anyio
async def test_logout_revokes_token(async_client):
    token = create_session_token({"sub": "USR-001", "role": "user"})
    headers = {"Authorization": f"Bearer {token}"}

    resp = await async_client.post("/api/v1/auth/logout", headers=headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["success"] is True

    resp = await async_client.get("/api/v1/auth/me", headers=headers)
    assert resp.status_code == 401


# --- User management ---

@pytest.mark.anyio
async def test_list_users_admin(async_client, admin_headers):
    resp = await async_client.get("/api/v1/users", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    emails = {u["email"] for u in resp.json()}
    assert {"admin@company.com", "jane.doe@company.com"} <= emails


@pytest.mark.anyio
async def test_list_users_forbidden_for_user(async_client, user_headers):
    resp = await async_client.get("/api/v1/users", headers=user_headers)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Admin access required"


@pytest.mark.anyio
async def test_create_user_links_existing_employee(async_client, admin_headers):
    # Employee first, then an account with the same email
    resp = await async_client.post(
        "/api/v1/employees",
        json={
            "id": "EMP-LINK-1",
            "name": "Priya Patel",
            "email": "priya.patel@company.com",
            "department": "Finance",
            "role": "Analyst",
            "joinDate": "2023-02-01",
        },
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text

    resp = await async_client.post(
        "/api/v1/users",
        json={"name": "Priya Patel", "email": "priya.patel@company.com", "password": "s3cret"},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["employeeId"] == "EMP-LINK-1"
    assert data["role"] == "user"

    # The new account can log in
    resp = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "priya.patel@company.com", "password": "s3cret"}
    )
    assert resp.status_code == 200, resp.text


@pytest.mark.anyio
async def test_create_user_creates_employee(async_client, admin_headers):
    resp = await async_client.post(
        "/api/v1/users",
        json={
            "name": "Omar Haddad",
            "email": "omar.haddad@company.com",
            "password": "pw",
            "role": "admin",
            "department": "Operations",
            "shouldCreateEmployee": True,
        },
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    employee_id = resp.json()["employeeId"]
    assert employee_id.startswith("EMP-")

    resp = await async_client.get("/api/v1/employees", headers=admin_headers)
    created = next(e for e in resp.json() if e["id"] == employee_id)
    assert created["department"] == "Operations"
    assert created["role"] == "Administrator"


@pytest.mark.anyio
async def test_create_user_duplicate_email(async_client, admin_headers):
    resp = await async_client.post(
        "/api/v1/users",
        json={"name": "Dup", "email": "jane.doe@company.com", "password": "pw"},
        headers=admin_headers,
    )
    assert resp.status_code == 409


@pytest.mark.anyio
async def test_admin_cannot_delete_self(async_client, admin_headers):
    resp = await async_client.delete("/api/v1/users/USR-ADMIN", headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_delete_user(async_client, admin_headers):
    resp = await async_client.post(
        "/api/v1/users",
        json={"name": "Temp", "email": "temp.account@company.com", "password": "pw"},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    user_id = resp.json()["id"]

    resp = await async_client.delete(f"/api/v1/users/{user_id}", headers=admin_headers)
    assert resp.status_code == 200, resp.text

    resp = await async_client.delete(f"/api/v1/users/{user_id}", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_reset_password_rules(async_client, admin_headers, user_headers):
    resp = await async_client.post(
        "/api/v1/users",
        json={"name": "Reset Me", "email": "reset.me@company.com", "password": "old-pw"},
        headers=admin_headers,
    )
    user_id = resp.json()["id"]

    # Another regular user may not change it
    resp = await async_client.put(
        f"/api/v1/users/{user_id}/password", json={"password": "hijack"}, headers=user_headers
    )
    assert resp.status_code == 403

    # The admin may
    resp = await async_client.put(
        f"/api/v1/users/{user_id}/password", json={"password": "new-pw"}, headers=admin_headers
    )
    assert resp.status_code == 200, resp.text

    resp = await async_client.post(
        "/api/v1/auth/login", json={"email": "reset.me@company.com", "password": "new-pw"}
    )
    assert resp.status_code == 200

    # And the user themselves
    own_headers = {"Authorization": f"Bearer {resp.json()['token']}"}
    resp = await async_client.put(
        f"/api/v1/users/{user_id}/password", json={"password": "third-pw"}, headers=own_headers
    )
    assert resp.status_code == 200, resp.text
