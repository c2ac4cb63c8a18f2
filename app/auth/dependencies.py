# =============================================================================
# app/auth/dependencies.py - Auth Gate
# =============================================================================
# Provides dependency injection for authentication.
#
# The session cookie is resolved through the SessionService. On a hit the
# handler receives the SessionUser; on a miss the request is rejected with
# 401 before the handler (or body validation) runs.
#
# Usage:
#   from app.auth import CurrentUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request

from app.dependencies import ContextDep
from app.exceptions import NotAuthenticatedError
from core.models.session import SessionUser

logger = logging.getLogger(__name__)


def read_session_token(request: Request, cookie_name: str) -> str | None:
    """Session token from the request cookies, if any."""
    return request.cookies.get(cookie_name) or None


async def get_current_user_optional(
    request: Request,
    context: ContextDep,
) -> Optional[SessionUser]:
    """
    Optionally get the current user from the session cookie.

    Returns None if there is no cookie or the session is invalid,
    instead of raising an error.

    Raises:
        SupabaseClientError: If the session store fails (reported as 500)
    """
    token = read_session_token(request, context.settings.SESSION_COOKIE_NAME)
    if token is None:
        return None
    return await context.sessions.resolve(token)


async def get_current_user(
    user: Annotated[Optional[SessionUser], Depends(get_current_user_optional)],
) -> SessionUser:
    """
    Require an authenticated user.

    Returns:
        SessionUser: The authenticated user (id and display name)

    Raises:
        NotAuthenticatedError: 401 if there is no valid session
    """
    if user is None:
        logger.debug("Rejected request without a valid session")
        raise NotAuthenticatedError()
    return user


# Type aliases for dependency injection
CurrentUser = Annotated[SessionUser, Depends(get_current_user)]
OptionalUser = Annotated[Optional[SessionUser], Depends(get_current_user_optional)]
