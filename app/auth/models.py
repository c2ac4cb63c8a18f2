# =============================================================================
# app/auth/models.py - Authentication Response Models
# =============================================================================
# Pydantic models for the credential endpoints' responses.
# Request bodies live in core/models/user.py.
# =============================================================================

from pydantic import BaseModel

from core.models.session import SessionUser


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. {"message": "Signup successful"}."""
    message: str


class LoginResponse(BaseModel):
    """
    Response of a successful login.

    Only the display name is returned; the session itself travels in the
    httpOnly cookie.
    """
    message: str
    name: str


class CheckAuthResponse(BaseModel):
    """Response of GET /check-auth for a signed-in caller."""
    authenticated: bool
    user: SessionUser
