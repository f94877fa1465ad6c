"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from port42.domain.model import (
    Comment,
    Community,
    EditRecord,
    Report,
    Resource,
    User,
    Vote,
    VoteTally,
)
from port42.domain.value import (
    CommentId,
    CommunityId,
    Difficulty,
    ReportId,
    ReportReason,
    ResourceId,
    ResourceType,
    Slug,
    UserId,
    Username,
    VotableType,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        email=row.get("email"),
        display_name=row.get("display_name"),
        reputation=row["reputation"],
        total_upvotes=row["total_upvotes"],
        total_downvotes=row["total_downvotes"],
        is_moderator=row["is_moderator"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_community(row: Dict[str, Any]) -> Community:
    """Convert database row to Community domain model."""
    return Community(
        id=CommunityId(_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
        description=row["description"],
        icon=row["icon"],
        color=row["color"],
        resource_count=row["resource_count"],
        member_count=row.get("member_count") or 0,
        created_by=_optional_uuid(row.get("created_by")),
        created_at=row["created_at"],
    )


def community_to_dict(community: Community) -> Dict[str, Any]:
    """Convert Community domain model to database dict."""
    return community.model_dump()


def row_to_resource(row: Dict[str, Any]) -> Resource:
    """Convert database row to Resource domain model.

    Args:
        row: Database row as dict

    Returns:
        Resource domain model
    """
    return Resource(
        id=ResourceId(_uuid(row["id"])),
        title=row["title"],
        url=row["url"],
        description=row.get("description") or "",
        resource_type=ResourceType(row["resource_type"]),
        difficulty=Difficulty(row["difficulty"]),
        tags=list(row.get("tags") or []),
        community_id=CommunityId(_uuid(row["community_id"])),
        submitted_by=UserId(_uuid(row["submitted_by"])),
        submitter_username=Username(row["submitter_username"]),
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        comment_count=row["comment_count"],
        views=row["views"],
        clicks=row["clicks"],
        is_active=row["is_active"],
        is_reported=row["is_reported"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def resource_to_dict(resource: Resource) -> Dict[str, Any]:
    """Convert Resource domain model to database dict.

    Enums are stored by value.
    """
    return resource.model_dump(mode="json", exclude={"created_at", "updated_at"}) | {
        "id": resource.id,
        "community_id": resource.community_id,
        "submitted_by": resource.submitted_by,
        "created_at": resource.created_at,
        "updated_at": resource.updated_at,
    }


def row_to_report(row: Dict[str, Any]) -> Report:
    """Convert database row to Report domain model."""
    return Report(
        id=ReportId(_uuid(row["id"])),
        resource_id=ResourceId(_uuid(row["resource_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        reason=ReportReason(row["reason"]),
        description=row.get("description"),
        created_at=row["created_at"],
    )


def report_to_dict(report: Report) -> Dict[str, Any]:
    """Convert Report domain model to database dict."""
    data = report.model_dump()
    data["reason"] = report.reason.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        resource_id=ResourceId(_uuid(row["resource_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_username=Username(row["author_username"]),
        content=row["content"],
        parent_id=_optional_uuid(row.get("parent_id")),
        root_id=_optional_uuid(row.get("root_id")),
        depth=row["depth"],
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        is_edited=row["is_edited"],
        is_deleted=row["is_deleted"],
        edit_history=[
            EditRecord.model_validate(entry) for entry in row.get("edit_history") or []
        ],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    The edit history is stored as JSON.
    """
    data = comment.model_dump()
    data["edit_history"] = [
        entry.model_dump(mode="json") for entry in comment.edit_history
    ]
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    data = vote.model_dump()
    data["votable_type"] = vote.votable_type.value
    data["vote_type"] = vote.vote_type.value
    return data


def row_to_tally(row: Dict[str, Any]) -> VoteTally:
    """Convert an ``upvotes, downvotes`` row to a VoteTally."""
    return VoteTally(upvotes=row["upvotes"], downvotes=row["downvotes"])
