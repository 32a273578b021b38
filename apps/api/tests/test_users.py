"""User sync, profile and daily target API tests."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from piring_sehat.core.config import Settings
from piring_sehat.errors import UpstreamFailure
from piring_sehat.main import create_app
from piring_sehat.repositories.base import DataStoreError
from piring_sehat.repositories.memory import InMemoryStore
from piring_sehat.services.users import UserService


class UserApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app = create_app(Settings(auth_provider="mock", store_backend="memory"))
        self.store: InMemoryStore = self.app.state.store
        self.client = TestClient(self.app)

    def test_sync_creates_user_once_and_returns_same_id(self) -> None:
        first = self.client.post(
            "/api/auth/sync-user",
            json={"firebase_uid": "fb-sari", "email": "sari@example.com"},
        )
        second = self.client.post("/api/auth/sync-user", json={"firebase_uid": "fb-sari"})

        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.status_code, 200)
        self.assertEqual(first.json()["id"], second.json()["id"])
        self.assertEqual(len(self.store.users), 1)

        user = self.store.get_user(first.json()["id"])
        self.assertEqual(user.username, "sari")
        self.assertEqual(user.role, "user")

    def test_sync_keeps_explicit_username(self) -> None:
        response = self.client.post(
            "/api/auth/sync-user",
            json={"firebase_uid": "fb-dewi", "email": "dewi@example.com", "username": "dewi_sehat"},
        )

        self.assertEqual(self.store.get_user(response.json()["id"]).username, "dewi_sehat")

    def test_sync_requires_firebase_uid(self) -> None:
        response = self.client.post("/api/auth/sync-user", json={"email": "x@example.com"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "firebase_uid is required"})
        self.assertEqual(self.store.users, {})

    def test_synced_user_can_authenticate(self) -> None:
        synced = self.client.post(
            "/api/auth/sync-user",
            json={"firebase_uid": "fb-sari", "email": "sari@example.com"},
        )

        me = self.client.get("/api/users/me", headers={"Authorization": "Bearer test:fb-sari"})

        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["id"], synced.json()["id"])
        self.assertEqual(me.json()["email"], "sari@example.com")

    def test_daily_target_round_trip_and_clear(self) -> None:
        user = self.store.create_user(firebase_uid="fb-sari", email=None, username="sari")
        headers = {"Authorization": "Bearer test:fb-sari"}

        initial = self.client.get(f"/api/users/{user.id}/daily-target", headers=headers)
        updated = self.client.put(f"/api/users/{user.id}/daily-target", headers=headers, json={"target": 1800})
        read_back = self.client.get(f"/api/users/{user.id}/daily-target", headers=headers)
        cleared = self.client.put(f"/api/users/{user.id}/daily-target", headers=headers, json={"target": None})

        self.assertEqual(initial.json(), {"target": None})
        self.assertEqual(updated.json(), {"target": 1800})
        self.assertEqual(read_back.json(), {"target": 1800})
        self.assertEqual(cleared.json(), {"target": None})
        self.assertIsNone(self.store.get_user(user.id).daily_calorie_target)

    def test_daily_target_rejects_non_numeric_value(self) -> None:
        user = self.store.create_user(firebase_uid="fb-sari", email=None, username="sari")

        response = self.client.put(
            f"/api/users/{user.id}/daily-target",
            headers={"Authorization": "Bearer test:fb-sari"},
            json={"target": "lots"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "target must be a number or null"})

    def test_daily_target_requires_authentication(self) -> None:
        response = self.client.get("/api/users/any-id/daily-target")

        self.assertEqual(response.status_code, 401)


class UserServiceTests(unittest.TestCase):
    def test_sync_recovers_when_a_concurrent_sync_won_the_insert(self) -> None:
        store = InMemoryStore()
        winner = store.create_user(firebase_uid="fb-race", email=None, username="race")
        service = UserService(store)

        with patch.object(store, "get_user_by_firebase_uid", side_effect=[None, store.get_user(winner.id)]):
            user_id = service.sync_firebase_user(firebase_uid="fb-race", email=None, username=None)

        self.assertEqual(user_id, winner.id)
        self.assertEqual(len(store.users), 1)

    def test_sync_reports_failure_when_insert_fails_and_user_is_absent(self) -> None:
        store = InMemoryStore()
        service = UserService(store)

        with patch.object(store, "create_user", side_effect=DataStoreError("disk full")):
            with self.assertRaises(UpstreamFailure) as ctx:
                service.sync_firebase_user(firebase_uid="fb-new", email="new@example.com", username=None)

        self.assertEqual(ctx.exception.message, "Failed to sync user")


if __name__ == "__main__":
    unittest.main()
