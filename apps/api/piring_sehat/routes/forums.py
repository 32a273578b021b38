"""Forum routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from piring_sehat.errors import ValidationError
from piring_sehat.routes.dependencies import Principal, get_authenticated_principal, get_forum_service
from piring_sehat.schemas.common import DataResponse
from piring_sehat.schemas.error import ErrorResponse
from piring_sehat.schemas.forum import CreateForumRequest, Forum, ForumView, UpdateForumRequest
from piring_sehat.services.forums import ForumService

router = APIRouter(
    prefix="/forums",
    tags=["Forums"],
    dependencies=[Depends(get_authenticated_principal)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

_MUTATION_RESPONSES: dict = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get("", response_model=DataResponse[list[ForumView]])
def list_forums(service: Annotated[ForumService, Depends(get_forum_service)]) -> DataResponse[list[ForumView]]:
    return DataResponse(data=service.list_forums())


@router.get(
    "/{id}",
    response_model=DataResponse[ForumView],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_forum(
    forum_id: Annotated[int, Path(alias="id")],
    service: Annotated[ForumService, Depends(get_forum_service)],
) -> DataResponse[ForumView]:
    return DataResponse(data=service.get_forum(forum_id=forum_id))


@router.post(
    "",
    response_model=DataResponse[Forum],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_forum(
    payload: CreateForumRequest,
    principal: Principal,
    service: Annotated[ForumService, Depends(get_forum_service)],
) -> DataResponse[Forum]:
    return DataResponse(data=service.create_forum(principal=principal, title=payload.title, content=payload.content))


@router.put("/{id}", response_model=DataResponse[Forum], responses=_MUTATION_RESPONSES)
def update_forum(
    forum_id: Annotated[int, Path(alias="id")],
    payload: UpdateForumRequest,
    principal: Principal,
    service: Annotated[ForumService, Depends(get_forum_service)],
) -> DataResponse[Forum]:
    if payload.title is None and payload.content is None:
        raise ValidationError("title or content is required")

    updated = service.update_forum(
        principal=principal,
        forum_id=forum_id,
        title=payload.title,
        content=payload.content,
    )
    return DataResponse(data=updated)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_MUTATION_RESPONSES,
)
def delete_forum(
    forum_id: Annotated[int, Path(alias="id")],
    principal: Principal,
    service: Annotated[ForumService, Depends(get_forum_service)],
) -> Response:
    service.delete_forum(principal=principal, forum_id=forum_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
