"""Food log API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from piring_sehat.schemas.common import NonBlankStr


class FoodLog(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    date: date
    food_name_custom: str | None = None
    calories: float
    food_id: int | None = None
    logged_at: datetime


class CreateFoodLogRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    date: date
    food_name: NonBlankStr = Field(alias="foodName")
    calories: float
    food_id: int | None = Field(default=None, alias="foodId")


class CalorieTotalResponse(BaseModel):
    total: float


class NutritionSummary(BaseModel):
    protein: float = 0
    carbs: float = 0
    fat: float = 0
