"""Application wiring tests: liveness, error mapping, CORS and configuration."""

from __future__ import annotations

import os
import unittest

from fastapi import APIRouter
from fastapi.testclient import TestClient

from piring_sehat.core.config import Settings, get_settings
from piring_sehat.core.logging_safety import safe_log_identifier
from piring_sehat.errors import (
    STATUS_BY_ERROR,
    ApiError,
    Forbidden,
    NotFound,
    Unauthenticated,
    UpstreamFailure,
    ValidationError,
    status_code_for,
)
from piring_sehat.main import create_app
from piring_sehat.repositories.memory import InMemoryStore
from piring_sehat.repositories.sql import SqlStore


def _memory_app():
    return create_app(Settings(auth_provider="mock", store_backend="memory"))


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "PIRING_AUTH_PROVIDER",
        "PIRING_STORE_BACKEND",
        "PIRING_FIREBASE_PRIVATE_KEY",
        "PIRING_CORS_ALLOWED_ORIGINS",
        "PIRING_PORT",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class SystemRouteTests(unittest.TestCase):
    def test_root_reports_server_running_as_plain_text(self) -> None:
        response = TestClient(_memory_app()).get("/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, "Server is running!")
        self.assertTrue(response.headers["content-type"].startswith("text/plain"))

    def test_api_test_route(self) -> None:
        response = TestClient(_memory_app()).get("/api/test")

        self.assertEqual(response.json(), {"message": "API is running"})

    def test_openapi_lists_every_resource_path(self) -> None:
        paths = TestClient(_memory_app()).get("/openapi.json").json()["paths"]

        for path in (
            "/api/food-logs",
            "/api/food-logs/{id}",
            "/api/food-logs/summary/month",
            "/api/food-logs/summary/nutrition",
            "/api/foods/search",
            "/api/foods/first",
            "/api/foods/all",
            "/api/foods",
            "/api/users/me",
            "/api/users/{id}/daily-target",
            "/api/auth/sync-user",
            "/api/forums",
            "/api/forums/{id}",
            "/api/forums/{forumId}/comments",
            "/api/forums/comments/{id}",
            "/api/testimonials",
            "/api/testimonials/user/{userId}",
        ):
            self.assertIn(path, paths)


class ErrorMappingTests(unittest.TestCase):
    def test_each_error_kind_maps_to_one_status(self) -> None:
        self.assertEqual(
            {error_type: status_code_for(error_type("x")) for error_type in STATUS_BY_ERROR},
            {
                ValidationError: 400,
                Unauthenticated: 401,
                Forbidden: 403,
                NotFound: 404,
                UpstreamFailure: 500,
            },
        )
        self.assertEqual(status_code_for(ApiError("unclassified")), 500)

    def test_unknown_api_path_returns_json_404(self) -> None:
        client = TestClient(_memory_app())

        for response in (client.get("/api/does-not-exist"), client.patch("/api/foods/all")):
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.json(), {"error": "Endpoint not found"})

    def test_unknown_path_outside_api_keeps_default_404(self) -> None:
        response = TestClient(_memory_app()).get("/nowhere")

        self.assertEqual(response.status_code, 404)
        self.assertNotIn("error", response.json())

    def test_unexpected_exception_becomes_generic_500(self) -> None:
        app = _memory_app()
        router = APIRouter()

        @router.get("/api/boom")
        def boom() -> None:
            raise RuntimeError("secret internals")

        app.include_router(router)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/boom")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Internal server error"})
        self.assertNotIn("secret", response.text)

    def test_unexpected_exception_is_still_logged_as_completed(self) -> None:
        app = _memory_app()
        router = APIRouter()

        @router.get("/api/boom")
        def boom() -> None:
            raise RuntimeError("secret internals")

        app.include_router(router)
        client = TestClient(app, raise_server_exceptions=False)

        with self.assertLogs("piring_sehat.main", level="INFO") as captured:
            client.get("/api/boom")

        completed = [line for line in captured.output if "request.completed" in line]
        self.assertEqual(len(completed), 1)
        self.assertIn("path=/api/boom status=500", completed[0])

    def test_validation_messages_follow_the_endpoint(self) -> None:
        client = TestClient(_memory_app())

        for path, body, message in (
            ("/api/auth/sync-user", {}, "firebase_uid is required"),
            ("/api/foods", {"name": "Tahu"}, "name and calories are required"),
            ("/api/foods", {"calories": 120}, "name and calories are required"),
        ):
            response = client.post(path, json=body)
            self.assertEqual(response.status_code, 400, path)
            self.assertEqual(response.json(), {"error": message})

    def test_error_log_identifiers_are_hashed(self) -> None:
        token = safe_log_identifier("fb-secret-uid", prefix="sub")

        self.assertTrue(token.startswith("sub-"))
        self.assertNotIn("fb-secret-uid", token)
        self.assertEqual(token, safe_log_identifier("fb-secret-uid", prefix="sub"))
        self.assertEqual(safe_log_identifier("", prefix="sub"), "sub-missing")


class CorsTests(unittest.TestCase):
    def test_allowed_origin_receives_cors_headers(self) -> None:
        client = TestClient(_memory_app())

        allowed = client.get("/api/test", headers={"Origin": "http://localhost:5173"})
        denied = client.get("/api/test", headers={"Origin": "https://evil.example"})

        self.assertEqual(allowed.headers.get("access-control-allow-origin"), "http://localhost:5173")
        self.assertNotIn("access-control-allow-origin", denied.headers)


class SettingsTests(_SettingsEnvCase):
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        self.assertEqual(settings.auth_provider, "firebase")
        self.assertEqual(settings.store_backend, "sql")
        self.assertEqual(settings.port, 3000)
        self.assertIn("https://piring-sehat.vercel.app", settings.cors_allowed_origins)

    def test_environment_overrides_and_private_key_unescaping(self) -> None:
        os.environ["PIRING_AUTH_PROVIDER"] = "mock"
        os.environ["PIRING_STORE_BACKEND"] = "memory"
        os.environ["PIRING_FIREBASE_PRIVATE_KEY"] = "-----BEGIN-----\\nabc\\n-----END-----"
        os.environ["PIRING_CORS_ALLOWED_ORIGINS"] = '["https://app.example"]'
        os.environ["PIRING_PORT"] = "8080"

        settings = get_settings()

        self.assertEqual(settings.auth_provider, "mock")
        self.assertEqual(settings.firebase_private_key, "-----BEGIN-----\nabc\n-----END-----")
        self.assertEqual(settings.cors_allowed_origins, ["https://app.example"])
        self.assertEqual(settings.port, 8080)
        self.assertIs(get_settings(), settings)

    def test_factory_builds_store_from_settings(self) -> None:
        memory_app = _memory_app()
        sql_app = create_app(
            Settings(
                auth_provider="mock",
                store_backend="sql",
                database_url="sqlite://",
                database_create_schema=True,
            )
        )

        self.assertIsInstance(memory_app.state.store, InMemoryStore)
        self.assertIsInstance(sql_app.state.store, SqlStore)

    def test_lifespan_closes_the_store(self) -> None:
        app = _memory_app()
        closed: list[bool] = []
        app.state.store.close = lambda: closed.append(True)

        with TestClient(app) as client:
            client.get("/api/test")

        self.assertEqual(closed, [True])


if __name__ == "__main__":
    unittest.main()
