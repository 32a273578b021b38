"""FastAPI application entrypoint."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security.utils import get_authorization_scheme_param
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from piring_sehat.adapters.auth import FirebaseTokenVerifier, MockTokenVerifier, TokenVerifier
from piring_sehat.core.config import Settings, get_settings
from piring_sehat.errors import ApiError, status_code_for
from piring_sehat.repositories.base import DataStore
from piring_sehat.repositories.memory import InMemoryStore
from piring_sehat.repositories.sql import SqlStore
from piring_sehat.routes import (
    auth,
    auth_router,
    food_logs,
    food_logs_router,
    foods,
    foods_router,
    forum_comments,
    forum_comments_router,
    forums,
    forums_router,
    system_router,
    testimonials,
    testimonials_router,
    users,
    users_router,
)
from piring_sehat.routes.dependencies import get_authenticated_principal
from piring_sehat.schemas.error import ErrorResponse
from piring_sehat.services.auth_gate import AuthGate

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

# Keyed by endpoint callable so the lookup does not depend on how routers are mounted.
_VALIDATION_MESSAGES: dict[Callable, str] = {
    food_logs.list_food_logs: "userId and date are required",
    food_logs.create_food_log: "userId, date, foodName, and calories are required",
    food_logs.delete_food_log: "A valid id is required",
    food_logs.monthly_calorie_total: "userId, startDate, and endDate are required",
    food_logs.daily_nutrition_summary: "userId and date are required",
    foods.search_foods: "limit must be a number",
    foods.first_food: "query is required",
    foods.create_food: "name and calories are required",
    users.get_daily_target: "id is required",
    users.update_daily_target: "target must be a number or null",
    auth.sync_user: "firebase_uid is required",
    forums.get_forum: "A valid forum id is required",
    forums.create_forum: "title and content are required",
    forums.update_forum: "A valid forum id is required",
    forums.delete_forum: "A valid forum id is required",
    forum_comments.list_comments: "A valid forumId is required",
    forum_comments.create_comment: "forumId and content are required",
    forum_comments.update_comment: "id and content are required",
    forum_comments.delete_comment: "A valid comment id is required",
    testimonials.list_user_testimonials: "userId is required",
    testimonials.create_testimonial: "username, job, and message are required",
}

_ENDPOINT_NOT_FOUND_MESSAGE = "Endpoint not found"
_INTERNAL_ERROR_MESSAGE = "Internal server error"


def _build_token_verifier(settings: Settings) -> TokenVerifier:
    if settings.auth_provider == "firebase":
        return FirebaseTokenVerifier(
            project_id=settings.firebase_project_id,
            client_email=settings.firebase_client_email,
            private_key=settings.firebase_private_key,
        )
    return MockTokenVerifier()


def _build_store(settings: Settings) -> DataStore:
    if settings.store_backend == "memory":
        return InMemoryStore()

    store = SqlStore.from_url(settings.database_url)
    if settings.database_create_schema:
        store.create_schema()
    return store


def _depends_on(dependant, call: Callable) -> bool:
    if dependant is None:
        return False
    return any(sub.call is call or _depends_on(sub, call) for sub in dependant.dependencies)


def _bearer_token(request: Request) -> str | None:
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump(exclude_none=True))


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    app.state.store.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Piring Sehat API", version="1.0.0", lifespan=_lifespan)
    app.state.settings = settings
    app.state.token_verifier = _build_token_verifier(settings)
    app.state.store = _build_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "request.completed method=%s path=%s status=%s duration_ms=%.1f",
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - start) * 1000,
            )

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=status_code_for(exc),
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # The body is parsed before dependencies run, so protected routes
        # re-check the credential here to keep 401 ahead of 400.
        route = request.scope.get("route")
        if _depends_on(getattr(route, "dependant", None), get_authenticated_principal):
            gate = AuthGate(app.state.token_verifier, app.state.store)
            try:
                await run_in_threadpool(
                    gate.admit,
                    _bearer_token(request),
                    correlation_id=request.headers.get("X-Correlation-Id", ""),
                )
            except ApiError as auth_error:
                return await handle_api_error(request, auth_error)

        endpoint = request.scope.get("endpoint")
        message = _VALIDATION_MESSAGES.get(endpoint, "Invalid request")
        logger.info(
            "request.invalid method=%s path=%s endpoint=%s error_count=%s",
            request.method,
            request.url.path,
            getattr(endpoint, "__name__", None),
            len(exc.errors()),
        )
        return _error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        # Unknown API paths and unsupported methods share one JSON 404.
        if request.url.path.startswith(f"{API_PREFIX}/") and exc.status_code in (404, 405):
            return _error_response(404, _ENDPOINT_NOT_FOUND_MESSAGE)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "request.unhandled_error method=%s path=%s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error_response(500, _INTERNAL_ERROR_MESSAGE)

    app.include_router(system_router)
    app.include_router(foods_router, prefix=API_PREFIX)
    app.include_router(food_logs_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(forum_comments_router, prefix=API_PREFIX)
    app.include_router(forums_router, prefix=API_PREFIX)
    app.include_router(testimonials_router, prefix=API_PREFIX)

    return app
