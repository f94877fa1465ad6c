"""Request authentication helpers shared by the routers.

Clients authenticate with the ``auth_token`` cookie set by the frontend, or
with an ``Authorization: Bearer <jwt>`` header (scripts, mobile clients).
"""

from fastapi import HTTPException, status

from port42.domain.service import JWTService

BEARER_PREFIX = "bearer "


def extract_token(auth_token: str | None, authorization: str | None) -> str | None:
    """Pick the JWT from the cookie, falling back to the bearer header."""
    if auth_token:
        return auth_token
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :].strip() or None
    return None


def optional_user_id(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
) -> str | None:
    """Resolve the caller's user ID, None for anonymous or invalid tokens."""
    user_id = jwt_service.get_user_id_from_token(
        extract_token(auth_token, authorization)
    )
    return str(user_id) if user_id else None


def require_user_id(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
    action: str,
) -> str:
    """Resolve the caller's user ID or reject the request.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie
        authorization: Authorization header value
        action: What the caller was trying to do, for the error message

    Returns:
        Authenticated user ID

    Raises:
        HTTPException: 401 if no valid token was presented
    """
    user_id = optional_user_id(jwt_service, auth_token, authorization)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id
