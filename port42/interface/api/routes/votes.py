"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel

from port42.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from port42.domain.service import JWTService
from port42.domain.value import VotableType
from port42.interface.api.auth import require_user_id

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for voting on a resource or comment."""

    entity_type: VotableType
    entity_id: str
    choice: str  # "up", "down" or "remove"


@router.post("/votes", response_model=CastVoteResponse)
async def cast_vote(
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
    x_connection_id: str | None = Header(default=None),
) -> CastVoteResponse:
    """Vote up, vote down, or withdraw a vote.

    Voting the same direction twice is a no-op; voting the opposite
    direction switches the vote. Requires authentication.

    Args:
        request: Entity and choice
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        authorization: Bearer token header
        x_connection_id: Caller's realtime connection, excluded from the echo

    Returns:
        Updated tallies and the caller's current choice

    Example:
        POST /votes
        {"entity_type": "resource", "entity_id": "...", "choice": "up"}

        Response:
        {
            "votable_type": "resource",
            "votable_id": "...",
            "upvotes": 1,
            "downvotes": 0,
            "score": 1,
            "user_choice": "up"
        }
    """
    user_id = require_user_id(jwt_service, auth_token, authorization, "vote")

    return await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=request.entity_type,
            votable_id=request.entity_id,
            choice=request.choice,
            user_id=user_id,
            connection_id=x_connection_id,
        )
    )
