"""Food catalog API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from piring_sehat.schemas.common import NonBlankStr


class Food(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    calories: float
    proteins: float | None = None
    carbohydrate: float | None = None
    fat: float | None = None
    image_url: str | None = None


class CreateFoodRequest(BaseModel):
    name: NonBlankStr
    calories: float = Field(ge=0)
    proteins: float | None = Field(default=None, ge=0)
    carbohydrate: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    image_url: str | None = None


class FoodListResponse(BaseModel):
    data: list[Food]
    count: int
