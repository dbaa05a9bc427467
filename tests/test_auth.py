"""
Tests for the authentication gates.

Token verification is injected; these tests use a fake verifier with
two known tokens.
"""

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from foundation.core.config import Settings
from foundation.main import create_app
from foundation.shared.errors import UnauthorizedError
from foundation.shared.responses import send_success
from foundation.shared.security.auth import (
    AuthUser,
    TokenVerifier,
    authenticate,
    authorize,
    optional_auth,
)

ADMIN = AuthUser(id="1", email="admin@example.com", role="admin")
MEMBER = AuthUser(id="2", email="member@example.com", role="member")
TOKENS = {"admin-token": ADMIN, "member-token": MEMBER}


def fake_verifier(token: str) -> AuthUser:
    try:
        return TOKENS[token]
    except KeyError:
        raise UnauthorizedError("Invalid token") from None


def _build_client(settings: Settings, verifier: TokenVerifier | None = fake_verifier) -> TestClient:
    app: FastAPI = create_app(settings, token_verifier=verifier)

    @app.get("/me")
    def me(user: AuthUser = Depends(authenticate)):
        return send_success("Current user", user)

    @app.get("/admin", dependencies=[Depends(authenticate), Depends(authorize("admin"))])
    def admin_only():
        return send_success("Welcome, admin")

    @app.get("/staff", dependencies=[Depends(authenticate), Depends(authorize("admin", "member"))])
    def staff_only():
        return send_success("Welcome, staff")

    @app.get("/unguarded-admin", dependencies=[Depends(authorize("admin"))])
    def unguarded_admin():
        return send_success("unreachable")

    @app.get("/feed")
    def feed(user: AuthUser | None = Depends(optional_auth)):
        return send_success("Feed", {"personalized": user is not None})

    return TestClient(app)


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestAuthenticate:
    """Tests for the authenticate gate."""

    def test_missing_header(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/me")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "No token provided"}

    def test_wrong_scheme(self, make_settings) -> None:
        response = _build_client(make_settings()).get(
            "/me", headers={"Authorization": "Basic dXNlcjpwYXNz"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"

    def test_unverifiable_token(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/me", headers=_bearer("forged"))

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_identity_is_attached(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/me", headers=_bearer("member-token"))

        assert response.status_code == 200
        assert response.json()["data"] == {
            "id": "2",
            "email": "member@example.com",
            "role": "member",
        }

    def test_tokens_are_rejected_without_a_verifier(self, make_settings) -> None:
        client = _build_client(make_settings(), verifier=None)

        response = client.get("/me", headers=_bearer("admin-token"))

        assert response.status_code == 401
        assert response.json()["message"] == "Token verification is not configured"


class TestAuthorize:
    """Tests for the role gate."""

    def test_allowed_role(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/admin", headers=_bearer("admin-token"))

        assert response.status_code == 200

    def test_any_of_several_roles(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/staff", headers=_bearer("member-token"))

        assert response.status_code == 200

    def test_role_mismatch_is_unauthorized(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/admin", headers=_bearer("member-token"))

        assert response.status_code == 401
        assert response.json()["message"] == "Insufficient permissions"

    def test_missing_identity(self, make_settings) -> None:
        response = _build_client(make_settings()).get(
            "/unguarded-admin", headers=_bearer("admin-token")
        )

        assert response.status_code == 401
        assert response.json()["message"] == "User not authenticated"


class TestOptionalAuth:
    """Tests for the optional_auth gate."""

    def test_anonymous(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/feed")

        assert response.status_code == 200
        assert response.json()["data"] == {"personalized": False}

    def test_valid_token(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/feed", headers=_bearer("admin-token"))

        assert response.json()["data"] == {"personalized": True}

    def test_invalid_token_is_ignored(self, make_settings) -> None:
        response = _build_client(make_settings()).get("/feed", headers=_bearer("forged"))

        assert response.status_code == 200
        assert response.json()["data"] == {"personalized": False}
