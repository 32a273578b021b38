"""Food log API tests: round trip, deletion, and calorie/nutrition summaries."""

from __future__ import annotations

from datetime import date
import unittest

from fastapi.testclient import TestClient

from piring_sehat.core.config import Settings
from piring_sehat.main import create_app
from piring_sehat.repositories.memory import InMemoryStore
from piring_sehat.services.food_logs import FoodLogService

AUTH_HEADERS = {"Authorization": "Bearer test:fb-u1"}


class FoodLogApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app = create_app(Settings(auth_provider="mock", store_backend="memory"))
        self.store: InMemoryStore = self.app.state.store
        self.store.create_user(firebase_uid="fb-u1", email="u1@example.com", username="u1")
        self.client = TestClient(self.app)

    def _log(self, **body) -> dict:
        payload = {"userId": "u1", "date": "2024-05-01", "foodName": "Rice", "calories": 200, **body}
        response = self.client.post("/api/food-logs", headers=AUTH_HEADERS, json=payload)
        self.assertEqual(response.status_code, 201)
        return response.json()["data"]

    def test_created_log_is_listed_for_its_day(self) -> None:
        created = self._log()

        response = self.client.get(
            "/api/food-logs",
            headers=AUTH_HEADERS,
            params={"userId": "u1", "date": "2024-05-01"},
        )

        self.assertEqual(response.status_code, 200)
        rows = response.json()["data"]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["id"], created["id"])
        self.assertEqual(rows[0]["calories"], 200)
        self.assertEqual(rows[0]["food_name_custom"], "Rice")
        self.assertEqual(rows[0]["date"], "2024-05-01")

    def test_logs_are_scoped_to_user_and_day(self) -> None:
        self._log()
        self._log(date="2024-05-02")
        self._log(userId="u2")

        response = self.client.get(
            "/api/food-logs",
            headers=AUTH_HEADERS,
            params={"userId": "u1", "date": "2024-05-01"},
        )

        self.assertEqual(len(response.json()["data"]), 1)

    def test_list_requires_user_and_date(self) -> None:
        response = self.client.get("/api/food-logs", headers=AUTH_HEADERS, params={"userId": "u1"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "userId and date are required"})

    def test_create_rejects_missing_fields_without_writing(self) -> None:
        writes_before = self.store.write_count

        response = self.client.post(
            "/api/food-logs",
            headers=AUTH_HEADERS,
            json={"userId": "u1", "date": "2024-05-01", "foodName": "Rice"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "userId, date, foodName, and calories are required"})
        self.assertEqual(self.store.write_count, writes_before)

    def test_delete_is_idempotent_and_hides_the_row(self) -> None:
        created = self._log()

        first = self.client.delete(f"/api/food-logs/{created['id']}", headers=AUTH_HEADERS)
        second = self.client.delete(f"/api/food-logs/{created['id']}", headers=AUTH_HEADERS)

        self.assertEqual(first.status_code, 204)
        self.assertEqual(second.status_code, 204)
        listed = self.client.get(
            "/api/food-logs",
            headers=AUTH_HEADERS,
            params={"userId": "u1", "date": "2024-05-01"},
        )
        self.assertEqual(listed.json()["data"], [])

    def test_delete_with_non_numeric_id_is_400(self) -> None:
        response = self.client.delete("/api/food-logs/abc", headers=AUTH_HEADERS)

        self.assertEqual(response.status_code, 400)

    def test_monthly_total_sums_inclusive_range(self) -> None:
        self._log(date="2024-05-01", calories=200)
        self._log(date="2024-05-31", calories=350.5)
        self._log(date="2024-06-01", calories=1000)

        response = self.client.get(
            "/api/food-logs/summary/month",
            headers=AUTH_HEADERS,
            params={"userId": "u1", "startDate": "2024-05-01", "endDate": "2024-05-31"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"total": 550.5})

    def test_monthly_total_without_logs_is_zero(self) -> None:
        response = self.client.get(
            "/api/food-logs/summary/month",
            headers=AUTH_HEADERS,
            params={"userId": "u1", "startDate": "2024-01-01", "endDate": "2024-01-31"},
        )

        self.assertEqual(response.json(), {"total": 0})

    def test_nutrition_summary_sums_catalog_macros(self) -> None:
        rice = self.store.create_food(
            name="Nasi putih", calories=200, proteins=4, carbohydrate=45, fat=0.5, image_url=None
        )
        egg = self.store.create_food(name="Telur rebus", calories=78, proteins=6, carbohydrate=None, fat=5, image_url=None)
        self._log(foodName="Nasi putih", foodId=rice.id)
        self._log(foodName="Telur rebus", calories=78, foodId=egg.id)
        self._log(foodName="Es teh", calories=90)

        response = self.client.get(
            "/api/food-logs/summary/nutrition",
            headers=AUTH_HEADERS,
            params={"userId": "u1", "date": "2024-05-01"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"data": {"protein": 10, "carbs": 45, "fat": 5.5}})

    def test_unknown_catalog_food_fails_with_stable_message(self) -> None:
        response = self.client.post(
            "/api/food-logs",
            headers=AUTH_HEADERS,
            json={"userId": "u1", "date": "2024-05-01", "foodName": "Ghost", "calories": 1, "foodId": 999},
        )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Failed to add food log"})


class FoodLogServiceTests(unittest.TestCase):
    def test_list_for_day_is_ordered_by_logged_at(self) -> None:
        store = InMemoryStore()
        first = store.create_food_log(user_id="u1", day=date(2024, 5, 1), food_name="A", calories=1, food_id=None)
        second = store.create_food_log(user_id="u1", day=date(2024, 5, 1), food_name="B", calories=2, food_id=None)

        logs = FoodLogService(store).list_for_day(user_id="u1", day=date(2024, 5, 1))

        self.assertEqual([log.id for log in logs], [first.id, second.id])


if __name__ == "__main__":
    unittest.main()
