"""User service layer."""

import logging

from piring_sehat.core.logging_safety import safe_log_identifier
from piring_sehat.errors import Unauthenticated, UpstreamFailure
from piring_sehat.repositories.base import DataStore, DataStoreError
from piring_sehat.schemas.user import UserProfile
from piring_sehat.services.store_errors import store_call

logger = logging.getLogger(__name__)


def _default_username(email: str | None) -> str | None:
    if not email:
        return None
    return email.split("@", 1)[0] or None


class UserService:
    def __init__(self, store: DataStore) -> None:
        self._store = store

    def sync_firebase_user(self, *, firebase_uid: str, email: str | None, username: str | None) -> str:
        """Return the local id for ``firebase_uid``, creating the user on first sight."""
        safe_uid = safe_log_identifier(firebase_uid, prefix="sub")
        with store_call("users.sync_lookup", "Failed to sync user"):
            existing = self._store.get_user_by_firebase_uid(firebase_uid)
        if existing is not None:
            return existing.id

        try:
            created = self._store.create_user(
                firebase_uid=firebase_uid,
                email=email,
                username=username or _default_username(email),
            )
        except DataStoreError as exc:
            # A concurrent sync may have inserted the same uid first.
            with store_call("users.sync_lookup", "Failed to sync user"):
                existing = self._store.get_user_by_firebase_uid(firebase_uid)
            if existing is None:
                logger.error("users.sync_failed subject_id=%s error=%s", safe_uid, exc)
                raise UpstreamFailure("Failed to sync user") from exc
            return existing.id

        logger.info("users.synced subject_id=%s user_id=%s", safe_uid, safe_log_identifier(created.id, prefix="pid"))
        return created.id

    def get_profile(self, *, user_id: str) -> UserProfile:
        with store_call("users.get_profile", "Failed to fetch user profile"):
            record = self._store.get_user(user_id)
        if record is None:
            raise Unauthenticated("Unauthorized: invalid token")
        return UserProfile.model_validate(record)

    def get_daily_target(self, *, user_id: str) -> float | None:
        with store_call("users.get_daily_target", "Failed to fetch daily calorie target"):
            record = self._store.get_user(user_id)
        return record.daily_calorie_target if record else None

    def update_daily_target(self, *, user_id: str, target: float | None) -> float | None:
        with store_call("users.update_daily_target", "Failed to update daily calorie target"):
            self._store.set_daily_calorie_target(user_id, target)
        return target
