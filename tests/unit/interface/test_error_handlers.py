"""Unit tests for the JSON error envelope."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from folio.config import Settings
from folio.interface.api.app import register_error_handlers
from folio.interface.error import ForbiddenError, UnauthorizedError


def make_client() -> TestClient:
    app = FastAPI()
    app.state.settings = Settings()
    register_error_handlers(app)

    @app.get("/forbidden")
    async def forbidden():
        raise ForbiddenError("Owner role required")

    @app.get("/stale")
    async def stale():
        raise UnauthorizedError("Invalid refresh token", clear_credentials=True)

    @app.get("/anonymous")
    async def anonymous():
        raise UnauthorizedError()

    @app.get("/crash")
    async def crash():
        raise RuntimeError("boom")

    @app.get("/typed")
    async def typed(limit: int):
        return {"limit": limit}

    return TestClient(app, raise_server_exceptions=False)


class TestErrorEnvelope:
    """Tests for register_error_handlers."""

    def test_forbidden(self):
        response = make_client().get("/forbidden")

        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "error": "Owner role required",
            "code": "FORBIDDEN",
        }

    def test_unauthorized_clears_cookies_when_asked(self):
        response = make_client().get("/stale")

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"
        cookies = " ".join(response.headers.get_list("set-cookie"))
        assert "access_token=" in cookies
        assert "refresh_token=" in cookies

    def test_unauthorized_keeps_cookies_by_default(self):
        response = make_client().get("/anonymous")

        assert response.status_code == 401
        assert response.json()["error"] == "Authentication required"
        assert "set-cookie" not in response.headers

    def test_validation_error_is_400(self):
        response = make_client().get("/typed", params={"limit": "many"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_unexpected_error_hides_details(self):
        response = make_client().get("/crash")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
        }
