"""User profile and daily calorie target routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from piring_sehat.routes.dependencies import Principal, get_authenticated_principal, get_user_service
from piring_sehat.schemas.error import ErrorResponse
from piring_sehat.schemas.user import DailyTargetRequest, DailyTargetResponse, UserProfile
from piring_sehat.services.users import UserService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(get_authenticated_principal)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get("/me", response_model=UserProfile)
def get_me(
    principal: Principal,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserProfile:
    return service.get_profile(user_id=principal.user_id)


@router.get("/{id}/daily-target", response_model=DailyTargetResponse, responses={400: {"model": ErrorResponse}})
def get_daily_target(
    user_id: Annotated[str, Path(alias="id", min_length=1)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> DailyTargetResponse:
    return DailyTargetResponse(target=service.get_daily_target(user_id=user_id))


@router.put("/{id}/daily-target", response_model=DailyTargetResponse, responses={400: {"model": ErrorResponse}})
def update_daily_target(
    user_id: Annotated[str, Path(alias="id", min_length=1)],
    payload: DailyTargetRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> DailyTargetResponse:
    return DailyTargetResponse(target=service.update_daily_target(user_id=user_id, target=payload.target))
