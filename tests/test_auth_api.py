"""Integration tests for session auth and profile endpoints."""

from storefront.data.models import UserModel


REGISTRATION = {
    "email": "new.user@example.com",
    "password": "ShopPass123!",
    "firstName": "New",
    "lastName": "User",
}


class TestRegister:
    def test_register_starts_session(self, client):
        response = client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["email"] == "new.user@example.com"
        assert user["firstName"] == "New"

        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["user"]["userId"] == user["userId"]

    def test_password_is_hashed(self, client, db):
        client.post("/api/auth/register", json=REGISTRATION)

        user = db.query(UserModel).filter_by(email="new.user@example.com").one()
        assert user.password_hash != "ShopPass123!"

    def test_duplicate_email(self, client):
        client.post("/api/auth/register", json=REGISTRATION)

        response = client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 409
        assert response.json() == {"error": "User already exists"}

    def test_short_password_rejected(self, client):
        response = client.post("/api/auth/register", json={**REGISTRATION, "password": "short"})
        assert response.status_code == 400
        assert "error" in response.json()


class TestLogin:
    def test_login_and_logout(self, client, make_user):
        make_user(email="shopper@example.com", password="ShopPass123!")

        response = client.post(
            "/api/auth/login",
            json={"email": "shopper@example.com", "password": "ShopPass123!"},
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert client.get("/api/auth/me").status_code == 200

        assert client.post("/api/auth/logout").status_code == 200
        assert client.get("/api/auth/me").status_code == 401

    def test_login_records_last_login(self, client, db, logged_in):
        db.refresh(logged_in)
        assert logged_in.last_login_at is not None

    def test_wrong_password(self, client, make_user):
        make_user()

        response = client.post(
            "/api/auth/login",
            json={"email": "shopper@example.com", "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_email(self, client):
        response = client.post(
            "/api/auth/login",
            json={"email": "ghost@example.com", "password": "whatever"},
        )
        assert response.status_code == 401


class TestProfile:
    def test_get_profile(self, client, logged_in):
        body = client.get("/api/user/profile").json()

        assert body["userId"] == logged_in.id
        assert body["email"] == "shopper@example.com"
        assert body["lastLoginAt"] is not None

    def test_update_profile_refreshes_session(self, client, logged_in):
        response = client.put("/api/user/profile", json={"firstName": "Changed", "lastName": "Name"})

        assert response.status_code == 200
        assert client.get("/api/auth/me").json()["user"]["firstName"] == "Changed"

    def test_change_password(self, client, logged_in):
        response = client.put(
            "/api/user/password",
            json={"currentPassword": "ShopPass123!", "newPassword": "EvenBetter456!"},
        )
        assert response.status_code == 200

        client.post("/api/auth/logout")
        login = client.post(
            "/api/auth/login",
            json={"email": "shopper@example.com", "password": "EvenBetter456!"},
        )
        assert login.status_code == 200

    def test_change_password_wrong_current(self, client, logged_in):
        response = client.put(
            "/api/user/password",
            json={"currentPassword": "wrong", "newPassword": "EvenBetter456!"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Current password is incorrect"}

    def test_profile_requires_session(self, client):
        assert client.get("/api/user/profile").status_code == 401
