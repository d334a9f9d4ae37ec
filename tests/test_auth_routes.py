# =============================================================================
# tests/test_auth_routes.py - Register / Login / Logout Tests
# =============================================================================

from unittest.mock import patch

from app.exceptions import StoreFailureError


def session_cookie(response) -> str | None:
    return response.cookies.get("token")


class TestRegister:
    def test_register_sets_cookie_and_redirects(self, client, context, registration_form):
        response = client.post("/register", data=registration_form)

        assert response.status_code == 303
        assert response.headers["location"] == "/profile"
        assert "httponly" in response.headers["set-cookie"].lower()

        identity = context.auth.validate_token(session_cookie(response))
        assert identity.email == "alice@example.com"

    def test_register_stores_hash_not_password(self, client, context, registration_form):
        client.post("/register", data=registration_form)

        user = context.users.find_by_email("alice@example.com")
        assert user.password != "wonderland"
        assert context.auth.verify_password("wonderland", user.password)
        assert user.username == "alice"
        assert user.name == "Alice Liddell"
        assert user.age == 28
        assert user.posts == []

    def test_register_only_email_and_password(self, client, context):
        response = client.post(
            "/register",
            data={"username": "", "name": "", "age": "", "email": "min@example.com", "password": "pw"},
        )

        assert response.status_code == 303
        user = context.users.find_by_email("min@example.com")
        assert user.username is None
        assert user.age is None

    def test_register_duplicate_email(self, client, registration_form):
        client.post("/register", data=registration_form)
        client.cookies.clear()

        response = client.post(
            "/register",
            data={**registration_form, "email": "ALICE@example.com", "username": "alice2"},
        )

        assert response.status_code == 400
        assert response.text == "User already exists"
        assert session_cookie(response) is None

    def test_register_missing_email(self, client):
        response = client.post("/register", data={"password": "pw"})
        assert response.status_code == 422

    def test_register_password_too_long_for_bcrypt(self, client, context, registration_form):
        response = client.post("/register", data={**registration_form, "password": "a" * 73})

        assert response.status_code == 422
        assert session_cookie(response) is None
        assert context.users.find_by_email("alice@example.com") is None

    def test_long_password_prefix_cannot_log_in(self, client, registration_form):
        client.post("/register", data={**registration_form, "password": "a" * 72})
        client.cookies.clear()

        response = client.post(
            "/login", data={"email": "alice@example.com", "password": "a" * 72 + "Y"}
        )

        assert response.status_code == 401
        assert session_cookie(response) is None

    def test_register_store_failure(self, client, context, registration_form):
        with patch.object(
            context.users, "find_by_email", side_effect=StoreFailureError("find user", "down")
        ):
            response = client.post("/register", data=registration_form)

        assert response.status_code == 500
        assert response.text == "Internal Server Error"


class TestLogin:
    def test_login_after_register(self, client, context, registration_form):
        client.post("/register", data=registration_form)
        client.cookies.clear()

        response = client.post(
            "/login", data={"email": "alice@example.com", "password": "wonderland"}
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/profile"
        identity = context.auth.validate_token(session_cookie(response))
        user = context.users.find_by_email("alice@example.com")
        assert identity.id == user.id

    def test_login_email_case_insensitive(self, client, registration_form):
        client.post("/register", data=registration_form)

        response = client.post(
            "/login", data={"email": "Alice@Example.com", "password": "wonderland"}
        )

        assert response.status_code == 303

    def test_login_wrong_password(self, client, registration_form):
        client.post("/register", data=registration_form)
        client.cookies.clear()

        response = client.post(
            "/login", data={"email": "alice@example.com", "password": "looking-glass"}
        )

        assert response.status_code == 401
        assert response.text == "Invalid credentials"
        assert session_cookie(response) is None

    def test_login_unknown_email(self, client):
        response = client.post(
            "/login", data={"email": "nobody@example.com", "password": "pw"}
        )

        assert response.status_code == 404
        assert response.text == "User does not exist"

    def test_login_then_profile(self, client, registration_form):
        client.post("/register", data=registration_form)
        client.cookies.clear()
        client.post("/login", data={"email": "alice@example.com", "password": "wonderland"})

        response = client.get("/profile")

        assert response.status_code == 200
        assert "Alice Liddell" in response.text

    def test_login_without_secret_fails(self, client, context, registration_form):
        client.post("/register", data=registration_form)
        client.cookies.clear()
        context.auth.secret = ""

        response = client.post(
            "/login", data={"email": "alice@example.com", "password": "wonderland"}
        )

        assert response.status_code == 500
        assert response.text == "Internal Server Error"


class TestLogout:
    def test_logout_clears_cookie(self, logged_in_client):
        response = logged_in_client.get("/logout")

        assert response.status_code == 302
        assert response.headers["location"] == "/login"
        assert "max-age=0" in response.headers["set-cookie"].lower()

        assert logged_in_client.get("/profile").headers["location"] == "/login"

    def test_logout_without_session(self, client):
        response = client.get("/logout")

        assert response.status_code == 302
        assert response.headers["location"] == "/login"


class TestPages:
    def test_index_has_registration_form(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert 'action="/register"' in response.text

    def test_login_page(self, client):
        response = client.get("/login")

        assert response.status_code == 200
        assert 'action="/login"' in response.text
