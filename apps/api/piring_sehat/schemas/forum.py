"""Forum and forum comment API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from piring_sehat.schemas.common import NonBlankStr


class Forum(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime | None = None


class ForumView(BaseModel):
    """Forum row joined with its author, as listed to readers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    username: str | None = None
    title: str
    content: str
    forum_created_at: datetime


class CreateForumRequest(BaseModel):
    title: NonBlankStr
    content: NonBlankStr


class UpdateForumRequest(BaseModel):
    title: NonBlankStr | None = None
    content: NonBlankStr | None = None


class Comment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    forum_id: int
    user_id: str
    content: str
    parent_comment_id: int | None = None
    created_at: datetime
    updated_at: datetime | None = None


class CommentView(BaseModel):
    """Comment row joined with its author, as listed under a forum."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    forum_id: int
    user_id: str
    username: str | None = None
    content: str
    parent_comment_id: int | None = None
    comment_created_at: datetime


class CreateCommentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: NonBlankStr
    parent_comment_id: int | None = Field(default=None, alias="parentCommentId")


class UpdateCommentRequest(BaseModel):
    content: NonBlankStr
