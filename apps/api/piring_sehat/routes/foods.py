"""Food catalog routes. All public."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from piring_sehat.routes.dependencies import get_food_service
from piring_sehat.schemas.common import DataResponse
from piring_sehat.schemas.error import ErrorResponse
from piring_sehat.schemas.food import CreateFoodRequest, Food, FoodListResponse
from piring_sehat.services.foods import FoodService

router = APIRouter(prefix="/foods", tags=["Foods"], responses={500: {"model": ErrorResponse}})


@router.get("/search", response_model=DataResponse[list[Food]])
def search_foods(
    service: Annotated[FoodService, Depends(get_food_service)],
    query: str | None = None,
    limit: int | None = None,
) -> DataResponse[list[Food]]:
    return DataResponse(data=service.search(query=query, limit=limit))


@router.get("/first", response_model=DataResponse[Food | None], responses={400: {"model": ErrorResponse}})
def first_food(
    query: Annotated[str, Query(min_length=1)],
    service: Annotated[FoodService, Depends(get_food_service)],
) -> DataResponse[Food | None]:
    return DataResponse(data=service.first(query=query))


@router.get("/all", response_model=FoodListResponse)
def all_foods(service: Annotated[FoodService, Depends(get_food_service)]) -> FoodListResponse:
    foods = service.list_all()
    return FoodListResponse(data=foods, count=len(foods))


@router.post(
    "",
    response_model=DataResponse[Food],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_food(
    payload: CreateFoodRequest,
    service: Annotated[FoodService, Depends(get_food_service)],
) -> DataResponse[Food]:
    return DataResponse(data=service.create(payload))
