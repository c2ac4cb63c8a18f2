# =============================================================================
# core/models/session.py - Login Session Schemas
# =============================================================================
# A session is the server-held record behind the session cookie.
# - SessionUser: The minimal identity carried by a session (id + name)
# - SessionRecord: A row of the sessions table
#
# Sessions deliberately carry no credential material: no email, no hash.
#
# Lifecycle: created (login) -> active -> destroyed (logout) | expired
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SessionUser(BaseModel):
    """
    Authenticated user as seen by route handlers.

    This is all a handler learns about the caller, and the only identity
    ever echoed back to the client.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class SessionRecord(BaseModel):
    """
    A stored session.

    Example row:
        {
            "id": "kq3V...",
            "user_id": "550e8400-e29b-41d4-a716-446655440000",
            "user_name": "Ada",
            "created_at": "2024-01-15T10:30:00+00:00",
            "expires_at": "2024-01-16T10:30:00+00:00"
        }
    """

    # Opaque random id; the cookie carries it signed
    id: str

    user_id: str
    user_name: str

    created_at: datetime

    # Absolute expiry; the record is ignored (and purged) once passed
    expires_at: datetime = Field(..., description="When the session stops being valid")

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_user(self) -> SessionUser:
        return SessionUser(id=self.user_id, name=self.user_name)
