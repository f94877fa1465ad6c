"""Resource routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel, Field

from port42.application.usecase.comment import (
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from port42.application.usecase.resource import (
    DeleteResourceRequest,
    DeleteResourceResponse,
    DeleteResourceUseCase,
    GetResourceRequest,
    GetResourceResponse,
    GetResourceUseCase,
    ListResourcesRequest,
    ListResourcesResponse,
    ListResourcesUseCase,
    ReportResourceRequest,
    ReportResourceResponse,
    ReportResourceUseCase,
    SubmitResourceRequest,
    SubmitResourceResponse,
    SubmitResourceUseCase,
    TrackClickRequest,
    TrackClickUseCase,
    UpdateResourceRequest,
    UpdateResourceResponse,
    UpdateResourceUseCase,
)
from port42.domain.service import JWTService
from port42.domain.value import (
    CommentSort,
    Difficulty,
    ReportReason,
    ResourceSort,
    ResourceType,
)
from port42.interface.api.auth import optional_user_id, require_user_id

router = APIRouter(prefix="/resources", tags=["resources"], route_class=DishkaRoute)


class SubmitResourceAPIRequest(BaseModel):
    """API request for submitting a resource."""

    title: str = Field(min_length=1, max_length=300)
    url: str = Field(min_length=1, max_length=2048)
    description: str = Field(default="", max_length=5000)
    resource_type: ResourceType = ResourceType.ARTICLE
    difficulty: Difficulty = Difficulty.BEGINNER
    tags: list[str] = Field(default_factory=list, max_length=10)
    community_id: str


class ReportResourceAPIRequest(BaseModel):
    """API request for reporting a resource."""

    reason: ReportReason
    description: str | None = Field(default=None, max_length=1000)


class UpdateResourceAPIRequest(BaseModel):
    """API request for editing a resource. Omitted fields are left as they are."""

    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = Field(default=None, max_length=5000)
    resource_type: ResourceType | None = None
    difficulty: Difficulty | None = None
    tags: list[str] | None = Field(default=None, max_length=10)


class TrackClickResponse(BaseModel):
    """Track click response."""

    success: bool


@router.post(
    "",
    response_model=SubmitResourceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_resource(
    request: SubmitResourceAPIRequest,
    submit_resource_use_case: FromDishka[SubmitResourceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SubmitResourceResponse:
    """Submit a link into a community.

    Requires authentication. A URL can only be submitted once.

    Args:
        request: Resource data
        submit_resource_use_case: Submit resource use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        authorization: Bearer token header

    Returns:
        Created resource
    """
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "submit resources"
    )

    return await submit_resource_use_case.execute(
        SubmitResourceRequest(
            title=request.title,
            url=request.url,
            description=request.description,
            resource_type=request.resource_type,
            difficulty=request.difficulty,
            tags=request.tags,
            community_id=request.community_id,
            user_id=user_id,
        )
    )


@router.get("", response_model=ListResourcesResponse)
async def list_resources(
    list_resources_use_case: FromDishka[ListResourcesUseCase],
    jwt_service: FromDishka[JWTService],
    sort: ResourceSort = ResourceSort.NEWEST,
    community_id: str | None = None,
    resource_type: ResourceType | None = Query(default=None, alias="type"),
    difficulty: Difficulty | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListResourcesResponse:
    """List resources with filtering and pagination.

    Args:
        list_resources_use_case: List resources use case from DI
        jwt_service: JWT service for token verification (injected)
        sort: Sort order
        community_id: Filter by community (optional)
        resource_type: Filter by resource type (optional)
        difficulty: Filter by difficulty (optional)
        limit: Maximum number of resources to return (1-100)
        offset: Number of resources to skip
        auth_token: JWT token from cookie (optional)
        authorization: Bearer token header (optional)

    Returns:
        Page of resources, with the caller's vote on each if authenticated
    """
    return await list_resources_use_case.execute(
        ListResourcesRequest(
            sort=sort,
            community_id=community_id,
            resource_type=resource_type,
            difficulty=difficulty,
            limit=limit,
            offset=offset,
            user_id=optional_user_id(jwt_service, auth_token, authorization),
        )
    )


@router.get("/{resource_id}", response_model=GetResourceResponse)
async def get_resource(
    resource_id: str,
    get_resource_use_case: FromDishka[GetResourceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetResourceResponse:
    """Get a resource by ID. Counts as a view."""
    return await get_resource_use_case.execute(
        GetResourceRequest(
            resource_id=resource_id,
            user_id=optional_user_id(jwt_service, auth_token, authorization),
        )
    )


@router.put("/{resource_id}", response_model=UpdateResourceResponse)
async def update_resource(
    resource_id: str,
    request: UpdateResourceAPIRequest,
    update_resource_use_case: FromDishka[UpdateResourceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UpdateResourceResponse:
    """Edit a resource's title, description, type, difficulty or tags.

    The submitter or a moderator may edit. The URL and community are fixed.
    """
    user_id = require_user_id(jwt_service, auth_token, authorization, "edit resources")

    return await update_resource_use_case.execute(
        UpdateResourceRequest(
            resource_id=resource_id,
            user_id=user_id,
            **request.model_dump(exclude_none=True),
        )
    )


@router.delete("/{resource_id}", response_model=DeleteResourceResponse)
async def delete_resource(
    resource_id: str,
    delete_resource_use_case: FromDishka[DeleteResourceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteResourceResponse:
    """Soft-delete a resource.

    The submitter or a moderator may delete. The resource disappears from
    listings and stops accepting votes and comments.
    """
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "delete resources"
    )

    return await delete_resource_use_case.execute(
        DeleteResourceRequest(resource_id=resource_id, user_id=user_id)
    )


@router.get("/{resource_id}/comments", response_model=GetCommentsResponse)
async def get_resource_comments(
    resource_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: CommentSort = CommentSort.NEWEST,
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetCommentsResponse:
    """Get one page of a resource's comment threads.

    Top-level comments are paginated; each carries its full reply tree.
    If authenticated, includes the caller's vote on each comment.

    Args:
        resource_id: Resource UUID
        get_comments_use_case: Get comments use case from DI
        jwt_service: JWT service for token verification (injected)
        sort: Order of top-level comments
        limit: Top-level comments per page (defaults to the configured page size)
        offset: Top-level comments to skip
        auth_token: JWT token from cookie (optional)
        authorization: Bearer token header (optional)

    Returns:
        Threaded comments with pagination info
    """
    return await get_comments_use_case.execute(
        GetCommentsRequest(
            resource_id=resource_id,
            sort=sort,
            limit=limit,
            offset=offset,
            user_id=optional_user_id(jwt_service, auth_token, authorization),
        )
    )


@router.post("/{resource_id}/click", response_model=TrackClickResponse)
async def track_click(
    resource_id: str,
    track_click_use_case: FromDishka[TrackClickUseCase],
) -> TrackClickResponse:
    """Count an outbound click on a resource link."""
    await track_click_use_case.execute(TrackClickRequest(resource_id=resource_id))
    return TrackClickResponse(success=True)


@router.post(
    "/{resource_id}/report",
    response_model=ReportResourceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_resource(
    resource_id: str,
    request: ReportResourceAPIRequest,
    report_resource_use_case: FromDishka[ReportResourceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ReportResourceResponse:
    """Flag a resource for moderation. Each user may report a resource once."""
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "report resources"
    )

    return await report_resource_use_case.execute(
        ReportResourceRequest(
            resource_id=resource_id,
            reason=request.reason,
            description=request.description,
            user_id=user_id,
        )
    )
