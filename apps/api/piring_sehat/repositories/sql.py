"""Relational data store backed by SQLAlchemy."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime
import logging

from sqlalchemy import create_engine, delete, event, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

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
from piring_sehat.repositories.tables import (
    Base,
    FoodLogRow,
    FoodRow,
    ForumCommentRow,
    ForumRow,
    TestimonialRow,
    UserRow,
)

logger = logging.getLogger(__name__)


def create_store_engine(database_url: str) -> Engine:
    """Build an engine; SQLite connections get foreign keys and cross-thread use enabled."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    options: dict = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    engine = create_engine(database_url, **options)

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def _user(row: UserRow) -> UserRecord:
    return UserRecord(
        id=row.id,
        firebase_uid=row.firebase_uid,
        email=row.email,
        username=row.username,
        role=row.role,
        daily_calorie_target=row.daily_calorie_target,
        created_at=row.created_at,
    )


def _food(row: FoodRow) -> FoodRecord:
    return FoodRecord(
        id=row.id,
        name=row.name,
        calories=row.calories,
        proteins=row.proteins,
        carbohydrate=row.carbohydrate,
        fat=row.fat,
        image_url=row.image_url,
    )


def _food_log(row: FoodLogRow) -> FoodLogRecord:
    return FoodLogRecord(
        id=row.id,
        user_id=row.user_id,
        date=row.date,
        food_name_custom=row.food_name_custom,
        calories=row.calories,
        food_id=row.food_id,
        logged_at=row.logged_at,
    )


def _forum(row: ForumRow) -> ForumRecord:
    return ForumRecord(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        content=row.content,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _forum_view(row: ForumRow, username: str | None) -> ForumViewRecord:
    return ForumViewRecord(
        id=row.id,
        user_id=row.user_id,
        username=username,
        title=row.title,
        content=row.content,
        forum_created_at=row.created_at,
    )


def _comment(row: ForumCommentRow) -> CommentRecord:
    return CommentRecord(
        id=row.id,
        forum_id=row.forum_id,
        user_id=row.user_id,
        content=row.content,
        parent_comment_id=row.parent_comment_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _testimonial(row: TestimonialRow) -> TestimonialRecord:
    return TestimonialRecord(
        id=row.id,
        user_id=row.user_id,
        username=row.username,
        job=row.job,
        message=row.message,
        created_at=row.created_at,
    )


class SqlStore(DataStore):
    """Runs each operation in its own short-lived session and transaction."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str) -> SqlStore:
        return cls(create_store_engine(database_url))

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise DataStoreError(str(exc)) from exc
        logger.info("store.schema_ready dialect=%s", self._engine.dialect.name)

    def close(self) -> None:
        self._engine.dispose()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise DataStoreError(str(exc)) from exc
        finally:
            session.close()

    # Users

    def get_user(self, user_id: str) -> UserRecord | None:
        with self._session() as session:
            row = session.get(UserRow, user_id)
            return _user(row) if row else None

    def get_user_by_firebase_uid(self, firebase_uid: str) -> UserRecord | None:
        with self._session() as session:
            row = session.scalars(select(UserRow).where(UserRow.firebase_uid == firebase_uid)).one_or_none()
            return _user(row) if row else None

    def create_user(
        self,
        *,
        firebase_uid: str,
        email: str | None,
        username: str | None,
        role: str = DEFAULT_ROLE,
    ) -> UserRecord:
        with self._session() as session:
            row = UserRow(firebase_uid=firebase_uid, email=email, username=username, role=role)
            session.add(row)
            session.flush()
            return _user(row)

    def set_daily_calorie_target(self, user_id: str, target: float | None) -> None:
        with self._session() as session:
            session.execute(update(UserRow).where(UserRow.id == user_id).values(daily_calorie_target=target))

    # Food catalog

    def list_foods(self, *, name_contains: str | None, limit: int) -> list[FoodRecord]:
        statement = select(FoodRow)
        if name_contains:
            statement = statement.where(FoodRow.name.ilike(f"%{name_contains}%"))
        statement = statement.order_by(FoodRow.id).limit(limit)
        with self._session() as session:
            return [_food(row) for row in session.scalars(statement)]

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
        with self._session() as session:
            row = FoodRow(
                name=name,
                calories=calories,
                proteins=proteins,
                carbohydrate=carbohydrate,
                fat=fat,
                image_url=image_url,
            )
            session.add(row)
            session.flush()
            return _food(row)

    # Food logs

    def list_food_logs(self, *, user_id: str, day: date) -> list[FoodLogRecord]:
        statement = (
            select(FoodLogRow)
            .where(FoodLogRow.user_id == user_id, FoodLogRow.date == day)
            .order_by(FoodLogRow.logged_at.asc(), FoodLogRow.id.asc())
        )
        with self._session() as session:
            return [_food_log(row) for row in session.scalars(statement)]

    def list_food_logs_between(self, *, user_id: str, start: date, end: date) -> list[FoodLogRecord]:
        statement = select(FoodLogRow).where(
            FoodLogRow.user_id == user_id,
            FoodLogRow.date >= start,
            FoodLogRow.date <= end,
        )
        with self._session() as session:
            return [_food_log(row) for row in session.scalars(statement)]

    def list_food_logs_with_foods(self, *, user_id: str, day: date) -> list[tuple[FoodLogRecord, FoodRecord]]:
        statement = (
            select(FoodLogRow, FoodRow)
            .join(FoodRow, FoodRow.id == FoodLogRow.food_id)
            .where(FoodLogRow.user_id == user_id, FoodLogRow.date == day)
            .order_by(FoodLogRow.logged_at.asc(), FoodLogRow.id.asc())
        )
        with self._session() as session:
            return [(_food_log(log), _food(food)) for log, food in session.execute(statement)]

    def create_food_log(
        self,
        *,
        user_id: str,
        day: date,
        food_name: str,
        calories: float,
        food_id: int | None,
    ) -> FoodLogRecord:
        with self._session() as session:
            row = FoodLogRow(
                user_id=user_id,
                date=day,
                food_name_custom=food_name,
                calories=calories,
                food_id=food_id,
            )
            session.add(row)
            session.flush()
            return _food_log(row)

    def delete_food_log(self, food_log_id: int) -> None:
        with self._session() as session:
            session.execute(delete(FoodLogRow).where(FoodLogRow.id == food_log_id))

    # Forums

    def _forum_view_statement(self):
        return select(ForumRow, UserRow.username).outerjoin(UserRow, UserRow.id == ForumRow.user_id)

    def list_forum_views(self) -> list[ForumViewRecord]:
        statement = self._forum_view_statement().order_by(ForumRow.created_at.desc(), ForumRow.id.desc())
        with self._session() as session:
            return [_forum_view(row, username) for row, username in session.execute(statement)]

    def get_forum_view(self, forum_id: int) -> ForumViewRecord | None:
        statement = self._forum_view_statement().where(ForumRow.id == forum_id)
        with self._session() as session:
            result = session.execute(statement).one_or_none()
            if result is None:
                return None
            row, username = result
            return _forum_view(row, username)

    def get_forum(self, forum_id: int) -> ForumRecord | None:
        with self._session() as session:
            row = session.get(ForumRow, forum_id)
            return _forum(row) if row else None

    def create_forum(self, *, user_id: str, title: str, content: str) -> ForumRecord:
        with self._session() as session:
            row = ForumRow(user_id=user_id, title=title, content=content)
            session.add(row)
            session.flush()
            return _forum(row)

    def update_forum(self, forum_id: int, *, title: str | None, content: str | None) -> ForumRecord:
        with self._session() as session:
            row = session.get(ForumRow, forum_id)
            if row is None:
                raise DataStoreError("update on forums matched no rows")
            if title is not None:
                row.title = title
            if content is not None:
                row.content = content
            row.updated_at = datetime.now(UTC)
            session.flush()
            return _forum(row)

    def delete_forum(self, forum_id: int) -> None:
        with self._session() as session:
            # Detach every reply whose parent is about to go, in any forum.
            doomed = select(ForumCommentRow.id).where(ForumCommentRow.forum_id == forum_id).scalar_subquery()
            session.execute(
                update(ForumCommentRow)
                .where(ForumCommentRow.parent_comment_id.in_(doomed))
                .values(parent_comment_id=None)
            )
            session.execute(delete(ForumCommentRow).where(ForumCommentRow.forum_id == forum_id))
            session.execute(delete(ForumRow).where(ForumRow.id == forum_id))

    # Forum comments

    def list_comment_views(self, forum_id: int) -> list[CommentViewRecord]:
        statement = (
            select(ForumCommentRow, UserRow.username)
            .outerjoin(UserRow, UserRow.id == ForumCommentRow.user_id)
            .where(ForumCommentRow.forum_id == forum_id)
            .order_by(ForumCommentRow.created_at.asc(), ForumCommentRow.id.asc())
        )
        with self._session() as session:
            return [
                CommentViewRecord(
                    id=row.id,
                    forum_id=row.forum_id,
                    user_id=row.user_id,
                    username=username,
                    content=row.content,
                    parent_comment_id=row.parent_comment_id,
                    comment_created_at=row.created_at,
                )
                for row, username in session.execute(statement)
            ]

    def get_comment(self, comment_id: int) -> CommentRecord | None:
        with self._session() as session:
            row = session.get(ForumCommentRow, comment_id)
            return _comment(row) if row else None

    def create_comment(
        self,
        *,
        forum_id: int,
        user_id: str,
        content: str,
        parent_comment_id: int | None,
    ) -> CommentRecord:
        with self._session() as session:
            row = ForumCommentRow(
                forum_id=forum_id,
                user_id=user_id,
                content=content,
                parent_comment_id=parent_comment_id,
            )
            session.add(row)
            session.flush()
            return _comment(row)

    def update_comment(self, comment_id: int, *, content: str) -> CommentRecord:
        with self._session() as session:
            row = session.get(ForumCommentRow, comment_id)
            if row is None:
                raise DataStoreError("update on forum_comments matched no rows")
            row.content = content
            row.updated_at = datetime.now(UTC)
            session.flush()
            return _comment(row)

    def delete_comment(self, comment_id: int) -> None:
        with self._session() as session:
            subtree = [comment_id]
            frontier = [comment_id]
            while frontier:
                frontier = list(
                    session.scalars(
                        select(ForumCommentRow.id).where(ForumCommentRow.parent_comment_id.in_(frontier))
                    )
                )
                subtree.extend(frontier)
            session.execute(
                update(ForumCommentRow).where(ForumCommentRow.id.in_(subtree)).values(parent_comment_id=None)
            )
            session.execute(delete(ForumCommentRow).where(ForumCommentRow.id.in_(subtree)))

    # Testimonials

    def list_testimonials(self) -> list[TestimonialRecord]:
        statement = select(TestimonialRow).order_by(TestimonialRow.created_at.desc(), TestimonialRow.id.desc())
        with self._session() as session:
            return [_testimonial(row) for row in session.scalars(statement)]

    def list_testimonials_for_user(self, user_id: str) -> list[TestimonialRecord]:
        statement = (
            select(TestimonialRow)
            .where(TestimonialRow.user_id == user_id)
            .order_by(TestimonialRow.created_at.desc(), TestimonialRow.id.desc())
        )
        with self._session() as session:
            return [_testimonial(row) for row in session.scalars(statement)]

    def create_testimonial(self, *, user_id: str, username: str, job: str, message: str) -> TestimonialRecord:
        with self._session() as session:
            row = TestimonialRow(user_id=user_id, username=username, job=job, message=message)
            session.add(row)
            session.flush()
            return _testimonial(row)

