"""Domain services."""

from .base import Service
from .comment_service import CommentNode, CommentService, ThreadPage
from .community_service import CommunityService
from .jwt_service import JWTService
from .resource_service import ResourceService
from .user_service import UserService
from .vote_service import VoteService, reputation_delta, tally_delta

__all__ = [
    "CommentNode",
    "CommentService",
    "CommunityService",
    "JWTService",
    "ResourceService",
    "Service",
    "ThreadPage",
    "UserService",
    "VoteService",
    "reputation_delta",
    "tally_delta",
]
