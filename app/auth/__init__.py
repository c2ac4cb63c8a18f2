# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides cookie-based session authentication.
#
# Usage:
#   from app.auth import CurrentUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    CurrentUser,
    OptionalUser,
    get_current_user,
    get_current_user_optional,
)
from app.auth.models import CheckAuthResponse, LoginResponse, MessageResponse

__all__ = [
    "CurrentUser",
    "OptionalUser",
    "get_current_user",
    "get_current_user_optional",
    "CheckAuthResponse",
    "LoginResponse",
    "MessageResponse",
]
