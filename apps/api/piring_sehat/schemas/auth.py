"""Authentication schemas."""

from typing import Any

from pydantic import BaseModel, Field


class VerifiedIdentity(BaseModel):
    """Identity asserted by the external provider once a token checks out."""

    subject_id: str = Field(min_length=1)
    claims: dict[str, Any] = Field(default_factory=dict)


class AuthPrincipal(BaseModel):
    """Resolved requester for the duration of one request."""

    external_subject_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    role: str = Field(default="user", min_length=1)


class SyncUserRequest(BaseModel):
    firebase_uid: str = Field(min_length=1)
    email: str | None = None
    username: str | None = None


class SyncUserResponse(BaseModel):
    id: str
