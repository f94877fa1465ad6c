"""Domain layer DI providers."""

from dishka import Scope, provide

from port42.config import AuthSettings, CommentSettings, ReputationSettings
from port42.domain.repository import (
    CommentRepository,
    CommunityRepository,
    ResourceRepository,
    UserRepository,
    VoteRepository,
)
from port42.domain.service import (
    CommentService,
    CommunityService,
    JWTService,
    ResourceService,
    UserService,
    VoteService,
)
from port42.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_community_service(
        self, community_repository: CommunityRepository, user_service: UserService
    ) -> CommunityService:
        """Provide community domain service."""
        return CommunityService(
            community_repository=community_repository, user_service=user_service
        )

    @provide
    def get_resource_service(
        self,
        resource_repository: ResourceRepository,
        community_service: CommunityService,
        user_service: UserService,
    ) -> ResourceService:
        """Provide resource domain service."""
        return ResourceService(
            resource_repository=resource_repository,
            community_service=community_service,
            user_service=user_service,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        resource_service: ResourceService,
        user_service: UserService,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            resource_service=resource_service,
            user_service=user_service,
            comment_settings=comment_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        resource_service: ResourceService,
        comment_service: CommentService,
        user_service: UserService,
        reputation_settings: ReputationSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            resource_service=resource_service,
            comment_service=comment_service,
            user_service=user_service,
            reputation_settings=reputation_settings,
        )
