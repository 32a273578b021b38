"""Forum comment service layer."""

import logging

from piring_sehat.core.logging_safety import safe_log_identifier
from piring_sehat.domain.ownership import ensure_can_mutate
from piring_sehat.errors import NotFound, ValidationError
from piring_sehat.repositories.base import CommentRecord, DataStore
from piring_sehat.schemas.auth import AuthPrincipal
from piring_sehat.schemas.forum import Comment, CommentView
from piring_sehat.services.forums import FORUM_NOT_FOUND_MESSAGE
from piring_sehat.services.store_errors import store_call

logger = logging.getLogger(__name__)

COMMENT_NOT_FOUND_MESSAGE = "Comment not found"
INVALID_PARENT_MESSAGE = "parentCommentId must reference a comment in the same forum"


class ForumCommentService:
    def __init__(self, store: DataStore) -> None:
        self._store = store

    def list_comments(self, *, forum_id: int) -> list[CommentView]:
        with store_call("forum_comments.list", "Failed to fetch forum comments"):
            records = self._store.list_comment_views(forum_id)
        return [CommentView.model_validate(record) for record in records]

    def create_comment(
        self,
        *,
        principal: AuthPrincipal,
        forum_id: int,
        content: str,
        parent_comment_id: int | None,
    ) -> Comment:
        with store_call("forum_comments.create_lookup", "Failed to add comment"):
            forum = self._store.get_forum(forum_id)
            parent = self._store.get_comment(parent_comment_id) if parent_comment_id is not None else None
        if forum is None:
            raise NotFound(FORUM_NOT_FOUND_MESSAGE)
        # Replies stay inside their parent's thread.
        if parent_comment_id is not None and (parent is None or parent.forum_id != forum_id):
            raise ValidationError(INVALID_PARENT_MESSAGE)

        with store_call("forum_comments.create", "Failed to add comment"):
            record = self._store.create_comment(
                forum_id=forum_id,
                user_id=principal.user_id,
                content=content,
                parent_comment_id=parent_comment_id,
            )
        return Comment.model_validate(record)

    def update_comment(self, *, principal: AuthPrincipal, comment_id: int, content: str) -> Comment:
        self._load_mutable(principal=principal, comment_id=comment_id, action="edit")
        with store_call("forum_comments.update", "Failed to update comment"):
            record = self._store.update_comment(comment_id, content=content)
        return Comment.model_validate(record)

    def delete_comment(self, *, principal: AuthPrincipal, comment_id: int) -> None:
        self._load_mutable(principal=principal, comment_id=comment_id, action="delete")
        with store_call("forum_comments.delete", "Failed to delete comment"):
            self._store.delete_comment(comment_id)
        logger.info(
            "forum_comments.deleted comment_id=%s principal_id=%s role=%s",
            comment_id,
            safe_log_identifier(principal.user_id, prefix="pid"),
            principal.role,
        )

    def _load_mutable(self, *, principal: AuthPrincipal, comment_id: int, action: str) -> CommentRecord:
        with store_call("forum_comments.get_owner", f"Failed to {action} comment"):
            record = self._store.get_comment(comment_id)
        if record is None:
            raise NotFound(COMMENT_NOT_FOUND_MESSAGE)

        ensure_can_mutate(
            owner_id=record.user_id,
            requester_id=principal.user_id,
            role=principal.role,
            message=f"You do not have permission to {action} this comment",
        )
        return record
