"""User profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from port42.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
)

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}", response_model=GetUserProfileResponse)
async def get_user_profile(
    user_id: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> GetUserProfileResponse:
    """Get a user's public profile.

    Args:
        user_id: User UUID
        get_user_profile_use_case: Get user profile use case from DI

    Returns:
        User profile information

    Example:
        GET /users/123e4567-e89b-12d3-a456-426614174000

        Response:
        {
            "user_id": "123e4567-e89b-12d3-a456-426614174000",
            "username": "alice",
            "display_name": "Alice",
            "reputation": 120,
            "level": "Apprentice",
            "total_upvotes": 26,
            "total_downvotes": 5,
            "is_moderator": false,
            "created_at": "2025-01-15T12:34:56Z"
        }
    """
    return await get_user_profile_use_case.execute(
        GetUserProfileRequest(user_id=user_id)
    )
