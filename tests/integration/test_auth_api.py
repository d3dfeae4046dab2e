"""Integration tests for registration, login and sessions."""

from httpx import AsyncClient

SESSION_COOKIE = "crypto-sports-session"


class TestRegister:
    async def test_register_logs_in(self, client: AsyncClient):
        response = await client.post("/api/register", json={
            "username": "newbie",
            "password": "SecureP@ss1",
            "email": "newbie@example.com",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "newbie"
        assert data["email"] == "newbie@example.com"
        assert "passwordHash" not in data
        assert SESSION_COOKIE in response.cookies

        me = await client.get("/api/user")
        assert me.status_code == 200
        assert me.json()["id"] == data["id"]

    async def test_duplicate_username(self, client: AsyncClient, user):
        response = await client.post("/api/auth/register", json={
            "username": user.username,
            "password": "SecureP@ss1",
            "email": "dupe@example.com",
        })
        assert response.status_code == 400
        assert response.json() == {"message": "Username already exists"}

    async def test_weak_password(self, client: AsyncClient):
        response = await client.post("/api/register", json={
            "username": "weak",
            "password": "short",
            "email": "weak@example.com",
        })
        assert response.status_code == 400
        assert "at least 8" in response.json()["message"]

    async def test_invalid_email(self, client: AsyncClient):
        response = await client.post("/api/register", json={
            "username": "bademail",
            "password": "SecureP@ss1",
            "email": "not-an-email",
        })
        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Invalid input"
        assert data["errors"]

    async def test_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/register", json={"username": "x"})
        assert response.status_code == 400


class TestLogin:
    async def test_login_and_current_user(self, client: AsyncClient, user):
        response = await client.post("/api/auth/login", json={
            "username": user.username,
            "password": "SecureP@ss1",
        })
        assert response.status_code == 200
        assert response.json() == {"id": user.id, "username": user.username, "email": user.email}

        me = await client.get("/api/auth/user")
        assert me.status_code == 200
        assert me.json()["username"] == user.username

    async def test_wrong_password(self, client: AsyncClient, user):
        response = await client.post("/api/login", json={"username": user.username, "password": "WrongP@ss1"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid username or password"}

    async def test_unknown_user(self, client: AsyncClient):
        response = await client.post("/api/login", json={"username": "ghost", "password": "SecureP@ss1"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid username or password"}


class TestSession:
    async def test_user_requires_session(self, client: AsyncClient):
        response = await client.get("/api/user")
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    async def test_logout_ends_session(self, logged_in_client: AsyncClient):
        assert (await logged_in_client.get("/api/user")).status_code == 200

        response = await logged_in_client.post("/api/logout")
        assert response.status_code == 200

        assert (await logged_in_client.get("/api/user")).status_code == 401

    async def test_logout_without_session(self, client: AsyncClient):
        response = await client.post("/api/auth/logout")
        assert response.status_code == 200

    async def test_tampered_cookie_ignored(self, client: AsyncClient):
        client.cookies.set(SESSION_COOKIE, "forged.value.here")
        response = await client.get("/api/user")
        assert response.status_code == 401
