"""Community use cases."""

from .create_community import (
    CreateCommunityRequest,
    CreateCommunityResponse,
    CreateCommunityUseCase,
)
from .get_community import GetCommunityRequest, GetCommunityUseCase
from .list_communities import (
    CommunityItem,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
)
from .toggle_membership import (
    ToggleMembershipRequest,
    ToggleMembershipResponse,
    ToggleMembershipUseCase,
)

__all__ = [
    "CommunityItem",
    "CreateCommunityRequest",
    "CreateCommunityResponse",
    "CreateCommunityUseCase",
    "GetCommunityRequest",
    "GetCommunityUseCase",
    "ListCommunitiesResponse",
    "ListCommunitiesUseCase",
    "ToggleMembershipRequest",
    "ToggleMembershipResponse",
    "ToggleMembershipUseCase",
]
