"""Account provisioning routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from piring_sehat.routes.dependencies import get_user_service
from piring_sehat.schemas.auth import SyncUserRequest, SyncUserResponse
from piring_sehat.schemas.error import ErrorResponse
from piring_sehat.services.users import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/sync-user",
    response_model=SyncUserResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def sync_user(
    payload: SyncUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> SyncUserResponse:
    user_id = service.sync_firebase_user(
        firebase_uid=payload.firebase_uid,
        email=payload.email,
        username=payload.username,
    )
    return SyncUserResponse(id=user_id)
