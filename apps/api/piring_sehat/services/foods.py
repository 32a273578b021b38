"""Food catalog service layer."""

from piring_sehat.repositories.base import DataStore
from piring_sehat.schemas.food import CreateFoodRequest, Food
from piring_sehat.services.store_errors import store_call

_SEARCH_LIMIT_DEFAULT = 5
_BROWSE_LIMIT_DEFAULT = 10
_LIMIT_MAX = 100


def _effective_limit(limit: int | None, default: int) -> int:
    if limit is None or limit < 1:
        return default
    return min(limit, _LIMIT_MAX)


class FoodService:
    def __init__(self, store: DataStore) -> None:
        self._store = store

    def search(self, *, query: str | None, limit: int | None = None) -> list[Food]:
        """Match on the first word of ``query``; a blank query browses the catalog unfiltered."""
        normalized = (query or "").strip()
        if not normalized:
            with store_call("foods.browse", "Failed to search foods"):
                records = self._store.list_foods(
                    name_contains=None,
                    limit=_effective_limit(limit, _BROWSE_LIMIT_DEFAULT),
                )
        else:
            first_word = normalized.split()[0]
            with store_call("foods.search", "Failed to search foods"):
                records = self._store.list_foods(
                    name_contains=first_word,
                    limit=_effective_limit(limit, _SEARCH_LIMIT_DEFAULT),
                )
        return [Food.model_validate(record) for record in records]

    def first(self, *, query: str) -> Food | None:
        if not query.strip():
            return None
        matches = self.search(query=query, limit=1)
        return matches[0] if matches else None

    def list_all(self) -> list[Food]:
        with store_call("foods.list_all", "Failed to fetch foods", expose_detail=True):
            records = self._store.list_foods(name_contains=None, limit=_LIMIT_MAX)
        return [Food.model_validate(record) for record in records]

    def create(self, payload: CreateFoodRequest) -> Food:
        with store_call("foods.create", "Failed to create food"):
            record = self._store.create_food(
                name=payload.name.strip(),
                calories=payload.calories,
                proteins=payload.proteins,
                carbohydrate=payload.carbohydrate,
                fat=payload.fat,
                image_url=payload.image_url,
            )
        return Food.model_validate(record)
