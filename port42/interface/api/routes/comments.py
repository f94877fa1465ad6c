"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from port42.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from port42.domain.service import JWTService
from port42.interface.api.auth import require_user_id

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    resource_id: str
    content: str = Field(min_length=1)
    parent_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str = Field(min_length=1)


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
    x_connection_id: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Comment on a resource or reply to another comment.

    Requires authentication. Replies nested deeper than the maximum depth
    are attached at the maximum depth.

    Args:
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        authorization: Bearer token header
        x_connection_id: Caller's realtime connection, excluded from the echo

    Returns:
        Created comment
    """
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "create comments"
    )

    return await create_comment_use_case.execute(
        CreateCommentRequest(
            resource_id=request.resource_id,
            content=request.content,
            author_id=user_id,
            parent_id=request.parent_id,
            connection_id=x_connection_id,
        )
    )


@router.put("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Edit a comment's content.

    Only the author can edit. The previous content is kept in the edit history.

    Args:
        comment_id: Comment UUID
        request: New content
        update_comment_use_case: Update comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        authorization: Bearer token header

    Returns:
        Updated comment
    """
    user_id = require_user_id(jwt_service, auth_token, authorization, "edit comments")

    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=comment_id,
            content=request.content,
            user_id=user_id,
        )
    )


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Soft-delete a comment.

    The author or a moderator may delete. Replies stay visible under the
    redacted comment.
    """
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "delete comments"
    )

    return await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
    )
