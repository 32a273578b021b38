"""Liveness routes."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from piring_sehat.schemas.common import MessageResponse

router = APIRouter(tags=["System"])


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root() -> str:
    return "Server is running!"


@router.get("/api/test", response_model=MessageResponse)
def api_test() -> MessageResponse:
    return MessageResponse(message="API is running")
