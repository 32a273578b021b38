"""Forum comment routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from piring_sehat.routes.dependencies import Principal, get_authenticated_principal, get_forum_comment_service
from piring_sehat.schemas.common import DataResponse
from piring_sehat.schemas.error import ErrorResponse
from piring_sehat.schemas.forum import Comment, CommentView, CreateCommentRequest, UpdateCommentRequest
from piring_sehat.services.forum_comments import ForumCommentService

router = APIRouter(
    prefix="/forums",
    tags=["Forum Comments"],
    dependencies=[Depends(get_authenticated_principal)],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

_MUTATION_RESPONSES: dict = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get("/{forumId}/comments", response_model=DataResponse[list[CommentView]])
def list_comments(
    forum_id: Annotated[int, Path(alias="forumId")],
    service: Annotated[ForumCommentService, Depends(get_forum_comment_service)],
) -> DataResponse[list[CommentView]]:
    return DataResponse(data=service.list_comments(forum_id=forum_id))


@router.post(
    "/{forumId}/comments",
    response_model=DataResponse[Comment],
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
def create_comment(
    forum_id: Annotated[int, Path(alias="forumId")],
    payload: CreateCommentRequest,
    principal: Principal,
    service: Annotated[ForumCommentService, Depends(get_forum_comment_service)],
) -> DataResponse[Comment]:
    created = service.create_comment(
        principal=principal,
        forum_id=forum_id,
        content=payload.content,
        parent_comment_id=payload.parent_comment_id,
    )
    return DataResponse(data=created)


@router.put("/comments/{id}", response_model=DataResponse[Comment], responses=_MUTATION_RESPONSES)
def update_comment(
    comment_id: Annotated[int, Path(alias="id")],
    payload: UpdateCommentRequest,
    principal: Principal,
    service: Annotated[ForumCommentService, Depends(get_forum_comment_service)],
) -> DataResponse[Comment]:
    return DataResponse(data=service.update_comment(principal=principal, comment_id=comment_id, content=payload.content))


@router.delete(
    "/comments/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_MUTATION_RESPONSES,
)
def delete_comment(
    comment_id: Annotated[int, Path(alias="id")],
    principal: Principal,
    service: Annotated[ForumCommentService, Depends(get_forum_comment_service)],
) -> Response:
    service.delete_comment(principal=principal, comment_id=comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
