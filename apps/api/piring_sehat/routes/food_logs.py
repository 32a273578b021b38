"""Food log routes."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from piring_sehat.routes.dependencies import get_authenticated_principal, get_food_log_service
from piring_sehat.schemas.common import DataResponse
from piring_sehat.schemas.error import ErrorResponse
from piring_sehat.schemas.food_log import CalorieTotalResponse, CreateFoodLogRequest, FoodLog, NutritionSummary
from piring_sehat.services.food_logs import FoodLogService

router = APIRouter(
    prefix="/food-logs",
    tags=["Food Logs"],
    dependencies=[Depends(get_authenticated_principal)],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get("", response_model=DataResponse[list[FoodLog]])
def list_food_logs(
    user_id: Annotated[str, Query(alias="userId", min_length=1)],
    day: Annotated[date, Query(alias="date")],
    service: Annotated[FoodLogService, Depends(get_food_log_service)],
) -> DataResponse[list[FoodLog]]:
    return DataResponse(data=service.list_for_day(user_id=user_id, day=day))


@router.post("", response_model=DataResponse[FoodLog], status_code=status.HTTP_201_CREATED)
def create_food_log(
    payload: CreateFoodLogRequest,
    service: Annotated[FoodLogService, Depends(get_food_log_service)],
) -> DataResponse[FoodLog]:
    return DataResponse(data=service.create(payload))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_food_log(
    food_log_id: Annotated[int, Path(alias="id")],
    service: Annotated[FoodLogService, Depends(get_food_log_service)],
) -> Response:
    service.delete(food_log_id=food_log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/summary/month", response_model=CalorieTotalResponse)
def monthly_calorie_total(
    user_id: Annotated[str, Query(alias="userId", min_length=1)],
    start_date: Annotated[date, Query(alias="startDate")],
    end_date: Annotated[date, Query(alias="endDate")],
    service: Annotated[FoodLogService, Depends(get_food_log_service)],
) -> CalorieTotalResponse:
    return CalorieTotalResponse(total=service.total_calories(user_id=user_id, start=start_date, end=end_date))


@router.get("/summary/nutrition", response_model=DataResponse[NutritionSummary])
def daily_nutrition_summary(
    user_id: Annotated[str, Query(alias="userId", min_length=1)],
    day: Annotated[date, Query(alias="date")],
    service: Annotated[FoodLogService, Depends(get_food_log_service)],
) -> DataResponse[NutritionSummary]:
    return DataResponse(data=service.nutrition_summary(user_id=user_id, day=day))
