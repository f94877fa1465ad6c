"""Repository interfaces for the Port42 domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from port42.domain.repository.comment import CommentRepository
from port42.domain.repository.community import CommunityRepository
from port42.domain.repository.resource import ResourceRepository
from port42.domain.repository.user import UserRepository
from port42.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "CommunityRepository",
    "ResourceRepository",
    "CommentRepository",
    "VoteRepository",
]
