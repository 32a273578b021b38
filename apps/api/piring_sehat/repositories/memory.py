"""In-memory repositories used by local scaffolding and tests."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from itertools import count
from typing import Iterator
from uuid import uuid4

from piring_sehat.repositories.base import (
    DEFAULT_ROLE,
    CommentRecord,
    CommentViewRecord,
    DataStore,
    DataStoreError,
    FoodLogRecord,
    FoodRecord,
    ForumRecord,
    ForumViewRecord,
    TestimonialRecord,
    UserRecord,
)


@dataclass(slots=True, eq=False)
class InMemoryStore(DataStore):
    """Simple, deterministic persistence layer for scaffolding and tests.

    Returned records are copies, so callers never mutate stored state.
    Setting ``failure_message`` makes every subsequent operation raise
    ``DataStoreError``.
    """

    users: dict[str, UserRecord] = field(default_factory=dict)
    foods: dict[int, FoodRecord] = field(default_factory=dict)
    food_logs: dict[int, FoodLogRecord] = field(default_factory=dict)
    forums: dict[int, ForumRecord] = field(default_factory=dict)
    comments: dict[int, CommentRecord] = field(default_factory=dict)
    testimonials: dict[int, TestimonialRecord] = field(default_factory=dict)
    write_count: int = 0
    failure_message: str | None = None
    _ids: dict[str, Iterator[int]] = field(default_factory=dict)

    def _check_available(self) -> None:
        if self.failure_message is not None:
            raise DataStoreError(self.failure_message)

    def _next_id(self, table: str) -> int:
        if table not in self._ids:
            self._ids[table] = count(1)
        return next(self._ids[table])

    def _record_write(self) -> None:
        self.write_count += 1

    # Users

    def get_user(self, user_id: str) -> UserRecord | None:
        self._check_available()
        user = self.users.get(user_id)
        return replace(user) if user else None

    def get_user_by_firebase_uid(self, firebase_uid: str) -> UserRecord | None:
        self._check_available()
        for user in self.users.values():
            if user.firebase_uid == firebase_uid:
                return replace(user)
        return None

    def create_user(
        self,
        *,
        firebase_uid: str,
        email: str | None,
        username: str | None,
        role: str = DEFAULT_ROLE,
    ) -> UserRecord:
        self._check_available()
        if any(user.firebase_uid == firebase_uid for user in self.users.values()):
            raise DataStoreError("duplicate key value violates unique constraint users_firebase_uid_key")

        user = UserRecord(
            id=str(uuid4()),
            firebase_uid=firebase_uid,
            email=email,
            username=username,
            role=role,
            daily_calorie_target=None,
            created_at=datetime.now(UTC),
        )
        self.users[user.id] = user
        self._record_write()
        return replace(user)

    def set_daily_calorie_target(self, user_id: str, target: float | None) -> None:
        self._check_available()
        user = self.users.get(user_id)
        if user is not None:
            user.daily_calorie_target = target
        self._record_write()

    # Food catalog

    def list_foods(self, *, name_contains: str | None, limit: int) -> list[FoodRecord]:
        self._check_available()
        needle = (name_contains or "").lower()
        foods = [replace(food) for food in self.foods.values() if needle in food.name.lower()]
        foods.sort(key=lambda food: food.id)
        return foods[:limit]

    def create_food(
        self,
        *,
        name: str,
        calories: float,
        proteins: float | None,
        carbohydrate: float | None,
        fat: float | None,
        image_url: str | None,
    ) -> FoodRecord:
        self._check_available()
        food = FoodRecord(
            id=self._next_id("foods"),
            name=name,
            calories=calories,
            proteins=proteins,
            carbohydrate=carbohydrate,
            fat=fat,
            image_url=image_url,
        )
        self.foods[food.id] = food
        self._record_write()
        return replace(food)

    # Food logs

    def list_food_logs(self, *, user_id: str, day: date) -> list[FoodLogRecord]:
        self._check_available()
        logs = [
            replace(log)
            for log in self.food_logs.values()
            if log.user_id == user_id and log.date == day
        ]
        logs.sort(key=lambda log: (log.logged_at, log.id))
        return logs

    def list_food_logs_between(self, *, user_id: str, start: date, end: date) -> list[FoodLogRecord]:
        self._check_available()
        return [
            replace(log)
            for log in self.food_logs.values()
            if log.user_id == user_id and start <= log.date <= end
        ]

    def list_food_logs_with_foods(self, *, user_id: str, day: date) -> list[tuple[FoodLogRecord, FoodRecord]]:
        pairs: list[tuple[FoodLogRecord, FoodRecord]] = []
        for log in self.list_food_logs(user_id=user_id, day=day):
            food = self.foods.get(log.food_id) if log.food_id is not None else None
            if food is not None:
                pairs.append((log, replace(food)))
        return pairs

    def create_food_log(
        self,
        *,
        user_id: str,
        day: date,
        food_name: str,
        calories: float,
        food_id: int | None,
    ) -> FoodLogRecord:
        self._check_available()
        if food_id is not None and food_id not in self.foods:
            raise DataStoreError("insert on food_logs violates foreign key constraint food_logs_food_id_fkey")

        log = FoodLogRecord(
            id=self._next_id("food_logs"),
            user_id=user_id,
            date=day,
            food_name_custom=food_name,
            calories=calories,
            food_id=food_id,
            logged_at=datetime.now(UTC),
        )
        self.food_logs[log.id] = log
        self._record_write()
        return replace(log)

    def delete_food_log(self, food_log_id: int) -> None:
        self._check_available()
        self.food_logs.pop(food_log_id, None)
        self._record_write()

    # Forums

    def _forum_view(self, forum: ForumRecord) -> ForumViewRecord:
        author = self.users.get(forum.user_id)
        return ForumViewRecord(
            id=forum.id,
            user_id=forum.user_id,
            username=author.username if author else None,
            title=forum.title,
            content=forum.content,
            forum_created_at=forum.created_at,
        )

    def list_forum_views(self) -> list[ForumViewRecord]:
        self._check_available()
        forums = sorted(self.forums.values(), key=lambda forum: (forum.created_at, forum.id), reverse=True)
        return [self._forum_view(forum) for forum in forums]

    def get_forum_view(self, forum_id: int) -> ForumViewRecord | None:
        self._check_available()
        forum = self.forums.get(forum_id)
        return self._forum_view(forum) if forum else None

    def get_forum(self, forum_id: int) -> ForumRecord | None:
        self._check_available()
        forum = self.forums.get(forum_id)
        return replace(forum) if forum else None

    def create_forum(self, *, user_id: str, title: str, content: str) -> ForumRecord:
        self._check_available()
        forum = ForumRecord(
            id=self._next_id("forums"),
            user_id=user_id,
            title=title,
            content=content,
            created_at=datetime.now(UTC),
        )
        self.forums[forum.id] = forum
        self._record_write()
        return replace(forum)

    def update_forum(self, forum_id: int, *, title: str | None, content: str | None) -> ForumRecord:
        self._check_available()
        forum = self.forums.get(forum_id)
        if forum is None:
            raise DataStoreError("update on forums matched no rows")

        if title is not None:
            forum.title = title
        if content is not None:
            forum.content = content
        forum.updated_at = datetime.now(UTC)
        self._record_write()
        return replace(forum)

    def delete_forum(self, forum_id: int) -> None:
        self._check_available()
        doomed = {c.id for c in self.comments.values() if c.forum_id == forum_id}
        for comment in self.comments.values():
            if comment.parent_comment_id in doomed and comment.id not in doomed:
                comment.parent_comment_id = None
        for comment_id in doomed:
            self.comments.pop(comment_id, None)
        self.forums.pop(forum_id, None)
        self._record_write()

    # Forum comments

    def list_comment_views(self, forum_id: int) -> list[CommentViewRecord]:
        self._check_available()
        comments = sorted(
            (c for c in self.comments.values() if c.forum_id == forum_id),
            key=lambda comment: (comment.created_at, comment.id),
        )
        views = []
        for comment in comments:
            author = self.users.get(comment.user_id)
            views.append(
                CommentViewRecord(
                    id=comment.id,
                    forum_id=comment.forum_id,
                    user_id=comment.user_id,
                    username=author.username if author else None,
                    content=comment.content,
                    parent_comment_id=comment.parent_comment_id,
                    comment_created_at=comment.created_at,
                )
            )
        return views

    def get_comment(self, comment_id: int) -> CommentRecord | None:
        self._check_available()
        comment = self.comments.get(comment_id)
        return replace(comment) if comment else None

    def create_comment(
        self,
        *,
        forum_id: int,
        user_id: str,
        content: str,
        parent_comment_id: int | None,
    ) -> CommentRecord:
        self._check_available()
        if forum_id not in self.forums:
            raise DataStoreError("insert on forum_comments violates foreign key constraint forum_comments_forum_id_fkey")
        if parent_comment_id is not None and parent_comment_id not in self.comments:
            raise DataStoreError(
                "insert on forum_comments violates foreign key constraint forum_comments_parent_comment_id_fkey"
            )

        comment = CommentRecord(
            id=self._next_id("forum_comments"),
            forum_id=forum_id,
            user_id=user_id,
            content=content,
            parent_comment_id=parent_comment_id,
            created_at=datetime.now(UTC),
        )
        self.comments[comment.id] = comment
        self._record_write()
        return replace(comment)

    def update_comment(self, comment_id: int, *, content: str) -> CommentRecord:
        self._check_available()
        comment = self.comments.get(comment_id)
        if comment is None:
            raise DataStoreError("update on forum_comments matched no rows")

        comment.content = content
        comment.updated_at = datetime.now(UTC)
        self._record_write()
        return replace(comment)

    def delete_comment(self, comment_id: int) -> None:
        self._check_available()
        pending = [comment_id]
        while pending:
            current = pending.pop()
            self.comments.pop(current, None)
            pending.extend(c.id for c in self.comments.values() if c.parent_comment_id == current)
        self._record_write()

    # Testimonials

    def list_testimonials(self) -> list[TestimonialRecord]:
        self._check_available()
        testimonials = sorted(self.testimonials.values(), key=lambda t: (t.created_at, t.id), reverse=True)
        return [replace(t) for t in testimonials]

    def list_testimonials_for_user(self, user_id: str) -> list[TestimonialRecord]:
        return [t for t in self.list_testimonials() if t.user_id == user_id]

    def create_testimonial(self, *, user_id: str, username: str, job: str, message: str) -> TestimonialRecord:
        self._check_available()
        testimonial = TestimonialRecord(
            id=self._next_id("testimonials"),
            user_id=user_id,
            username=username,
            job=job,
            message=message,
            created_at=datetime.now(UTC),
        )
        self.testimonials[testimonial.id] = testimonial
        self._record_write()
        return replace(testimonial)
