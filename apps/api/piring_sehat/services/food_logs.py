"""Food log service layer."""

from datetime import date

from piring_sehat.repositories.base import DataStore
from piring_sehat.schemas.food_log import CreateFoodLogRequest, FoodLog, NutritionSummary
from piring_sehat.services.store_errors import store_call


class FoodLogService:
    def __init__(self, store: DataStore) -> None:
        self._store = store

    def list_for_day(self, *, user_id: str, day: date) -> list[FoodLog]:
        with store_call("food_logs.list", "Failed to fetch food logs"):
            records = self._store.list_food_logs(user_id=user_id, day=day)
        return [FoodLog.model_validate(record) for record in records]

    def create(self, payload: CreateFoodLogRequest) -> FoodLog:
        with store_call("food_logs.create", "Failed to add food log"):
            record = self._store.create_food_log(
                user_id=payload.user_id,
                day=payload.date,
                food_name=payload.food_name,
                calories=payload.calories,
                food_id=payload.food_id,
            )
        return FoodLog.model_validate(record)

    def delete(self, *, food_log_id: int) -> None:
        with store_call("food_logs.delete", "Failed to delete food log"):
            self._store.delete_food_log(food_log_id)

    def total_calories(self, *, user_id: str, start: date, end: date) -> float:
        with store_call("food_logs.total_calories", "Failed to fetch monthly calorie total"):
            records = self._store.list_food_logs_between(user_id=user_id, start=start, end=end)
        return sum((record.calories or 0 for record in records), 0.0)

    def nutrition_summary(self, *, user_id: str, day: date) -> NutritionSummary:
        """Sum macro-nutrients of the day's logs that reference a catalog food.

        Custom entries without a catalog food carry no macro data and are
        skipped.
        """
        with store_call("food_logs.nutrition_summary", "Failed to fetch daily nutrition summary"):
            pairs = self._store.list_food_logs_with_foods(user_id=user_id, day=day)

        foods = [food for _log, food in pairs]
        return NutritionSummary(
            protein=sum((food.proteins or 0 for food in foods), 0.0),
            carbs=sum((food.carbohydrate or 0 for food in foods), 0.0),
            fat=sum((food.fat or 0 for food in foods), 0.0),
        )
