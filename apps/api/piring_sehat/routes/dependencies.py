"""Dependency wiring for routes."""

from __future__ import annotations

from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from piring_sehat.adapters.auth import TokenVerifier
from piring_sehat.repositories.base import DataStore
from piring_sehat.schemas.auth import AuthPrincipal
from piring_sehat.services.auth_gate import AuthGate
from piring_sehat.services.food_logs import FoodLogService
from piring_sehat.services.foods import FoodService
from piring_sehat.services.forum_comments import ForumCommentService
from piring_sehat.services.forums import ForumService
from piring_sehat.services.testimonials import TestimonialService
from piring_sehat.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id") or f"req-{uuid4()}"
    request.state.correlation_id = correlation_id
    return correlation_id


def get_request_correlation_id(request: Request) -> str:
    return _request_correlation_id(request)


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def get_store(request: Request) -> DataStore:
    return request.app.state.store


def get_auth_gate(
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    store: Annotated[DataStore, Depends(get_store)],
) -> AuthGate:
    return AuthGate(verifier, store)


def get_authenticated_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    correlation_id: Annotated[str, Depends(get_request_correlation_id)],
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
) -> AuthPrincipal:
    """Admit the request or raise ``Unauthenticated``.

    ``HTTPBearer`` yields no credentials for a missing header, a non-Bearer
    scheme or an empty token; all three count as a missing credential.
    """
    token = credentials.credentials if credentials is not None else None
    return gate.admit(token, correlation_id=correlation_id)


def get_food_service(store: Annotated[DataStore, Depends(get_store)]) -> FoodService:
    return FoodService(store)


def get_food_log_service(store: Annotated[DataStore, Depends(get_store)]) -> FoodLogService:
    return FoodLogService(store)


def get_user_service(store: Annotated[DataStore, Depends(get_store)]) -> UserService:
    return UserService(store)


def get_forum_service(store: Annotated[DataStore, Depends(get_store)]) -> ForumService:
    return ForumService(store)


def get_forum_comment_service(store: Annotated[DataStore, Depends(get_store)]) -> ForumCommentService:
    return ForumCommentService(store)


def get_testimonial_service(store: Annotated[DataStore, Depends(get_store)]) -> TestimonialService:
    return TestimonialService(store)


Principal = Annotated[AuthPrincipal, Depends(get_authenticated_principal)]
