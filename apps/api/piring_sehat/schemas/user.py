"""User API schemas."""

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None = None
    username: str | None = None
    role: str


class DailyTargetRequest(BaseModel):
    target: float | None = None


class DailyTargetResponse(BaseModel):
    target: float | None = None
