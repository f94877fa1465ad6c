"""Community routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from port42.application.usecase.community import (
    CommunityItem,
    CreateCommunityRequest,
    CreateCommunityResponse,
    CreateCommunityUseCase,
    GetCommunityRequest,
    GetCommunityUseCase,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
    ToggleMembershipRequest,
    ToggleMembershipResponse,
    ToggleMembershipUseCase,
)
from port42.domain.service import JWTService
from port42.interface.api.auth import require_user_id

router = APIRouter(prefix="/communities", tags=["communities"], route_class=DishkaRoute)


class CreateCommunityAPIRequest(BaseModel):
    """API request for creating a community."""

    name: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=500)
    icon: str | None = Field(default=None, max_length=16)
    color: str | None = None


@router.get("", response_model=ListCommunitiesResponse)
async def list_communities(
    list_communities_use_case: FromDishka[ListCommunitiesUseCase],
) -> ListCommunitiesResponse:
    """List all communities.

    Args:
        list_communities_use_case: List communities use case from DI

    Returns:
        All communities ordered by name
    """
    return await list_communities_use_case.execute()


@router.post(
    "",
    response_model=CreateCommunityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_community(
    request: CreateCommunityAPIRequest,
    create_community_use_case: FromDishka[CreateCommunityUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateCommunityResponse:
    """Open a new community. The creator joins it as its first member.

    Args:
        request: Community name, description and optional icon and color
        create_community_use_case: Create community use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        authorization: Bearer token header

    Returns:
        Created community, with its slug derived from the name
    """
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "create communities"
    )

    return await create_community_use_case.execute(
        CreateCommunityRequest(
            name=request.name,
            description=request.description,
            icon=request.icon,
            color=request.color,
            user_id=user_id,
        )
    )


@router.get("/{slug}", response_model=CommunityItem)
async def get_community(
    slug: str,
    get_community_use_case: FromDishka[GetCommunityUseCase],
) -> CommunityItem:
    """Get a community by its slug, e.g. ``/communities/python``."""
    return await get_community_use_case.execute(GetCommunityRequest(slug=slug))


@router.post(
    "/{community_id}/toggle-membership", response_model=ToggleMembershipResponse
)
async def toggle_membership(
    community_id: str,
    toggle_membership_use_case: FromDishka[ToggleMembershipUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ToggleMembershipResponse:
    """Join the community, or leave it if already a member."""
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "join communities"
    )

    return await toggle_membership_use_case.execute(
        ToggleMembershipRequest(community_id=community_id, user_id=user_id)
    )
