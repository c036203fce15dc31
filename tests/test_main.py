"""
Tests for the composition root and the host-app error handlers.
"""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from oncall.core.config import Settings
from oncall.domain.errors import CallError, StatusKind
from oncall.interfaces.endpoint import Callable
from oncall.main import create_app
from oncall.shared.errors.handlers import register_error_handlers
from oncall.shared.logging import configure_logging


@pytest.fixture
def app(greet_model) -> FastAPI:
    return create_app(
        Callable(greet_model), path="/greet", config=Settings(_env_file=None, log_level="WARNING")
    )


class TestCreateApp:
    """Tests for create_app."""

    def test_callable_is_served_at_path(self, app: FastAPI) -> None:
        client = TestClient(app)
        response = client.post("/greet", json={"data": {"who": "World"}})
        assert response.status_code == 200
        assert response.json() == {"data": {"greeting": "Hello World!"}}

    def test_preflight_is_routed(self, app: FastAPI) -> None:
        response = TestClient(app).options("/greet", headers={"Origin": "http://localhost"})
        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "http://localhost"

    def test_other_methods_reach_the_callable(self, app: FastAPI) -> None:
        assert TestClient(app).get("/greet").status_code == 405

    def test_other_paths_are_not_found(self, app: FastAPI) -> None:
        assert TestClient(app).post("/other", json={"data": {}}).status_code == 404

    def test_schema_is_not_published(self, app: FastAPI) -> None:
        assert TestClient(app).get("/openapi.json").status_code == 404


class TestErrorHandlers:
    """Tests for register_error_handlers."""

    def test_call_error_in_regular_route(self) -> None:
        app = FastAPI()
        register_error_handlers(app)

        @app.get("/profile")
        async def profile() -> dict:
            raise CallError(StatusKind.PERMISSION_DENIED, "admins only")

        response = TestClient(app).get("/profile")
        assert response.status_code == 403
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {
            "error": {"status": "PERMISSION_DENIED", "message": "admins only"}
        }


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_package_level_overrides_root(self) -> None:
        configure_logging("WARNING", package_level="DEBUG")
        try:
            assert logging.getLogger().level == logging.WARNING
            assert logging.getLogger("oncall").level == logging.DEBUG
            assert logging.getLogger("uvicorn.access").level == logging.WARNING
        finally:
            configure_logging("WARNING")

    def test_package_follows_root_by_default(self) -> None:
        configure_logging("ERROR")
        try:
            assert logging.getLogger("oncall").getEffectiveLevel() == logging.ERROR
        finally:
            configure_logging("WARNING")
