"""PostgreSQL repository implementations."""

from port42.persistence.repository.comment import PostgresCommentRepository
from port42.persistence.repository.community import PostgresCommunityRepository
from port42.persistence.repository.resource import PostgresResourceRepository
from port42.persistence.repository.user import PostgresUserRepository
from port42.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresCommunityRepository",
    "PostgresResourceRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
]
