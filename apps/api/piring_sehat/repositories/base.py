"""Persistence records and the provider-neutral data store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime

DEFAULT_ROLE = "user"


class DataStoreError(Exception):
    """Raised when the backing store rejects or fails an operation."""


@dataclass(slots=True)
class UserRecord:
    id: str
    firebase_uid: str
    email: str | None
    username: str | None
    role: str
    daily_calorie_target: float | None
    created_at: datetime


@dataclass(slots=True)
class FoodRecord:
    id: int
    name: str
    calories: float
    proteins: float | None = None
    carbohydrate: float | None = None
    fat: float | None = None
    image_url: str | None = None


@dataclass(slots=True)
class FoodLogRecord:
    id: int
    user_id: str
    date: date
    food_name_custom: str | None
    calories: float
    food_id: int | None
    logged_at: datetime


@dataclass(slots=True)
class ForumRecord:
    id: int
    user_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(slots=True)
class ForumViewRecord:
    id: int
    user_id: str
    username: str | None
    title: str
    content: str
    forum_created_at: datetime


@dataclass(slots=True)
class CommentRecord:
    id: int
    forum_id: int
    user_id: str
    content: str
    parent_comment_id: int | None
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(slots=True)
class CommentViewRecord:
    id: int
    forum_id: int
    user_id: str
    username: str | None
    content: str
    parent_comment_id: int | None
    comment_created_at: datetime


@dataclass(slots=True)
class TestimonialRecord:
    id: int
    user_id: str
    username: str
    job: str
    message: str
    created_at: datetime


class DataStore(ABC):
    """Operations the services need from the relational store.

    Every method either returns plain records detached from the backend or
    raises ``DataStoreError``.
    """

    # Users

    @abstractmethod
    def get_user(self, user_id: str) -> UserRecord | None: ...

    @abstractmethod
    def get_user_by_firebase_uid(self, firebase_uid: str) -> UserRecord | None: ...

    @abstractmethod
    def create_user(
        self,
        *,
        firebase_uid: str,
        email: str | None,
        username: str | None,
        role: str = DEFAULT_ROLE,
    ) -> UserRecord: ...

    @abstractmethod
    def set_daily_calorie_target(self, user_id: str, target: float | None) -> None: ...

    # Food catalog

    @abstractmethod
    def list_foods(self, *, name_contains: str | None, limit: int) -> list[FoodRecord]:
        """Return catalog rows, optionally filtered by case-insensitive substring."""

    @abstractmethod
    def create_food(
        self,
        *,
        name: str,
        calories: float,
        proteins: float | None,
        carbohydrate: float | None,
        fat: float | None,
        image_url: str | None,
    ) -> FoodRecord: ...

    # Food logs

    @abstractmethod
    def list_food_logs(self, *, user_id: str, day: date) -> list[FoodLogRecord]:
        """Return the day's logs ordered by ``logged_at`` ascending."""

    @abstractmethod
    def list_food_logs_between(self, *, user_id: str, start: date, end: date) -> list[FoodLogRecord]:
        """Return logs with ``start <= date <= end``."""

    @abstractmethod
    def list_food_logs_with_foods(self, *, user_id: str, day: date) -> list[tuple[FoodLogRecord, FoodRecord]]:
        """Return the day's logs that reference a catalog food, paired with it."""

    @abstractmethod
    def create_food_log(
        self,
        *,
        user_id: str,
        day: date,
        food_name: str,
        calories: float,
        food_id: int | None,
    ) -> FoodLogRecord: ...

    @abstractmethod
    def delete_food_log(self, food_log_id: int) -> None: ...

    # Forums

    @abstractmethod
    def list_forum_views(self) -> list[ForumViewRecord]:
        """Return all forums, newest first."""

    @abstractmethod
    def get_forum_view(self, forum_id: int) -> ForumViewRecord | None: ...

    @abstractmethod
    def get_forum(self, forum_id: int) -> ForumRecord | None: ...

    @abstractmethod
    def create_forum(self, *, user_id: str, title: str, content: str) -> ForumRecord: ...

    @abstractmethod
    def update_forum(self, forum_id: int, *, title: str | None, content: str | None) -> ForumRecord:
        """Apply the non-null fields and return the updated row."""

    @abstractmethod
    def delete_forum(self, forum_id: int) -> None:
        """Delete the forum together with its comments."""

    # Forum comments

    @abstractmethod
    def list_comment_views(self, forum_id: int) -> list[CommentViewRecord]:
        """Return the forum's comments, oldest first."""

    @abstractmethod
    def get_comment(self, comment_id: int) -> CommentRecord | None: ...

    @abstractmethod
    def create_comment(
        self,
        *,
        forum_id: int,
        user_id: str,
        content: str,
        parent_comment_id: int | None,
    ) -> CommentRecord: ...

    @abstractmethod
    def update_comment(self, comment_id: int, *, content: str) -> CommentRecord: ...

    @abstractmethod
    def delete_comment(self, comment_id: int) -> None:
        """Delete the comment together with its reply subtree."""

    # Testimonials

    @abstractmethod
    def list_testimonials(self) -> list[TestimonialRecord]:
        """Return all testimonials, newest first."""

    @abstractmethod
    def list_testimonials_for_user(self, user_id: str) -> list[TestimonialRecord]: ...

    @abstractmethod
    def create_testimonial(self, *, user_id: str, username: str, job: str, message: str) -> TestimonialRecord: ...

    def close(self) -> None:
        """Release backend resources; the default store holds none."""
