"""Testimonial API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from piring_sehat.schemas.common import NonBlankStr


class Testimonial(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    username: str
    job: str
    message: str
    created_at: datetime


class CreateTestimonialRequest(BaseModel):
    username: NonBlankStr
    job: NonBlankStr
    message: NonBlankStr
