"""Mock persistence providers for testing."""

from dishka import Scope, provide

from port42.domain.repository import (
    CommentRepository,
    CommunityRepository,
    ResourceRepository,
    UserRepository,
    VoteRepository,
)
from port42.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryCommunityRepository,
    InMemoryResourceRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from port42.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across requests made against one
    container (e2e tests). Each test builds its own container, so tests
    stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_community_repository(self) -> CommunityRepository:
        """Provide in-memory community repository."""
        return InMemoryCommunityRepository()

    @provide(scope=Scope.APP)
    def get_resource_repository(self) -> ResourceRepository:
        """Provide in-memory resource repository."""
        return InMemoryResourceRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()
