# =============================================================================
# app/auth/cookies.py - Session Cookie Helpers
# =============================================================================
# The session cookie is httpOnly, Secure in production, SameSite=None when
# Secure (the front-end is on another origin) and lives as long as the
# server-side session. Clearing uses the same attributes, otherwise
# browsers keep the old cookie.
# =============================================================================

from fastapi import Response

from app.config import Settings


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )
