"""Application layer DI providers."""

from dishka import Scope, provide

from port42.adapter.realtime import RealtimeOutbox
from port42.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    UpdateCommentUseCase,
)
from port42.application.usecase.community import (
    CreateCommunityUseCase,
    GetCommunityUseCase,
    ListCommunitiesUseCase,
    ToggleMembershipUseCase,
)
from port42.application.usecase.resource import (
    DeleteResourceUseCase,
    GetResourceUseCase,
    ListResourcesUseCase,
    ReportResourceUseCase,
    SubmitResourceUseCase,
    TrackClickUseCase,
    UpdateResourceUseCase,
)
from port42.application.usecase.user import GetUserProfileUseCase
from port42.application.usecase.vote import CastVoteUseCase
from port42.domain.service import (
    CommentService,
    CommunityService,
    ResourceService,
    UserService,
    VoteService,
)
from port42.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self,
        vote_service: VoteService,
        comment_service: CommentService,
        outbox: RealtimeOutbox,
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service,
            comment_service=comment_service,
            outbox=outbox,
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        outbox: RealtimeOutbox,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service, outbox=outbox)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Resource use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_resource_use_case(
        self, resource_service: ResourceService
    ) -> SubmitResourceUseCase:
        """Provide submit resource use case."""
        return SubmitResourceUseCase(resource_service=resource_service)

    @provide(scope=Scope.REQUEST)
    def get_get_resource_use_case(
        self, resource_service: ResourceService, vote_service: VoteService
    ) -> GetResourceUseCase:
        """Provide get resource use case."""
        return GetResourceUseCase(
            resource_service=resource_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_resources_use_case(
        self, resource_service: ResourceService, vote_service: VoteService
    ) -> ListResourcesUseCase:
        """Provide list resources use case."""
        return ListResourcesUseCase(
            resource_service=resource_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_report_resource_use_case(
        self, resource_service: ResourceService
    ) -> ReportResourceUseCase:
        """Provide report resource use case."""
        return ReportResourceUseCase(resource_service=resource_service)

    @provide(scope=Scope.REQUEST)
    def get_track_click_use_case(
        self, resource_service: ResourceService
    ) -> TrackClickUseCase:
        """Provide track click use case."""
        return TrackClickUseCase(resource_service=resource_service)

    @provide(scope=Scope.REQUEST)
    def get_update_resource_use_case(
        self, resource_service: ResourceService
    ) -> UpdateResourceUseCase:
        """Provide update resource use case."""
        return UpdateResourceUseCase(resource_service=resource_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_resource_use_case(
        self, resource_service: ResourceService
    ) -> DeleteResourceUseCase:
        """Provide delete resource use case."""
        return DeleteResourceUseCase(resource_service=resource_service)

    # Community use cases
    @provide(scope=Scope.REQUEST)
    def get_list_communities_use_case(
        self, community_service: CommunityService
    ) -> ListCommunitiesUseCase:
        """Provide list communities use case."""
        return ListCommunitiesUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_get_community_use_case(
        self, community_service: CommunityService
    ) -> GetCommunityUseCase:
        """Provide get community use case."""
        return GetCommunityUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_create_community_use_case(
        self, community_service: CommunityService
    ) -> CreateCommunityUseCase:
        """Provide create community use case."""
        return CreateCommunityUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_membership_use_case(
        self, community_service: CommunityService
    ) -> ToggleMembershipUseCase:
        """Provide toggle membership use case."""
        return ToggleMembershipUseCase(community_service=community_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)
