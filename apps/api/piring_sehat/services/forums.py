"""Forum service layer."""

import logging

from piring_sehat.core.logging_safety import safe_log_identifier
from piring_sehat.domain.ownership import ensure_can_mutate
from piring_sehat.errors import NotFound
from piring_sehat.repositories.base import DataStore, ForumRecord
from piring_sehat.schemas.auth import AuthPrincipal
from piring_sehat.schemas.forum import Forum, ForumView
from piring_sehat.services.store_errors import store_call

logger = logging.getLogger(__name__)

FORUM_NOT_FOUND_MESSAGE = "Forum not found"


class ForumService:
    def __init__(self, store: DataStore) -> None:
        self._store = store

    def list_forums(self) -> list[ForumView]:
        with store_call("forums.list", "Failed to fetch forums"):
            records = self._store.list_forum_views()
        return [ForumView.model_validate(record) for record in records]

    def get_forum(self, *, forum_id: int) -> ForumView:
        with store_call("forums.get", "Failed to fetch forum"):
            record = self._store.get_forum_view(forum_id)
        if record is None:
            raise NotFound(FORUM_NOT_FOUND_MESSAGE)
        return ForumView.model_validate(record)

    def create_forum(self, *, principal: AuthPrincipal, title: str, content: str) -> Forum:
        with store_call("forums.create", "Failed to create forum"):
            record = self._store.create_forum(user_id=principal.user_id, title=title, content=content)
        return Forum.model_validate(record)

    def update_forum(
        self,
        *,
        principal: AuthPrincipal,
        forum_id: int,
        title: str | None,
        content: str | None,
    ) -> Forum:
        self._load_mutable(principal=principal, forum_id=forum_id, action="edit")
        with store_call("forums.update", "Failed to update forum"):
            record = self._store.update_forum(forum_id, title=title, content=content)
        return Forum.model_validate(record)

    def delete_forum(self, *, principal: AuthPrincipal, forum_id: int) -> None:
        self._load_mutable(principal=principal, forum_id=forum_id, action="delete")
        with store_call("forums.delete", "Failed to delete forum"):
            self._store.delete_forum(forum_id)
        logger.info(
            "forums.deleted forum_id=%s principal_id=%s role=%s",
            forum_id,
            safe_log_identifier(principal.user_id, prefix="pid"),
            principal.role,
        )

    def _load_mutable(self, *, principal: AuthPrincipal, forum_id: int, action: str) -> ForumRecord:
        with store_call("forums.get_owner", f"Failed to {action} forum"):
            record = self._store.get_forum(forum_id)
        if record is None:
            raise NotFound(FORUM_NOT_FOUND_MESSAGE)

        ensure_can_mutate(
            owner_id=record.user_id,
            requester_id=principal.user_id,
            role=principal.role,
            message=f"You do not have permission to {action} this forum",
        )
        return record
