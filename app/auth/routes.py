# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for signup, login, logout and the check-auth probe.
#
# Login creates a server-side session and hands its signed token to the
# browser as an httpOnly cookie. Logout removes the session and tells the
# browser to drop the cookie.
# =============================================================================

import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from app.auth.cookies import clear_session_cookie, set_session_cookie
from app.auth.dependencies import OptionalUser, read_session_token
from app.auth.models import CheckAuthResponse, LoginResponse, MessageResponse
from app.dependencies import ContextDep
from app.exceptions import LogoutFailedError
from core.models.session import SessionUser
from core.models.user import LoginRequest, SignupRequest
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(body: SignupRequest, context: ContextDep) -> MessageResponse:
    """
    Register a new user.

    Raises:
        400: If the email is already registered or the body is invalid
    """
    await context.users.signup(body.name, body.email, body.password)
    return MessageResponse(message="Signup successful")


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    context: ContextDep,
) -> LoginResponse:
    """
    Log in with email and password.

    Sets the session cookie and returns the user's display name.
    Any session the browser already had is ended first.

    Raises:
        400: "Invalid email or password" (same for unknown email and wrong password)
    """
    user = await context.users.authenticate(body.email, body.password)

    previous_token = read_session_token(request, context.settings.SESSION_COOKIE_NAME)
    if previous_token:
        await context.sessions.destroy(previous_token)

    token = await context.sessions.create(SessionUser(id=user.id, name=user.name))
    set_session_cookie(response, token, context.settings)

    logger.info(f"User logged in: {user.id}")
    return LoginResponse(message="Login successful", name=user.name)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    context: ContextDep,
) -> MessageResponse:
    """
    Log out.

    Works with or without a session; the cookie is always cleared on success.

    Raises:
        500: If the session could not be removed from storage
    """
    token = read_session_token(request, context.settings.SESSION_COOKIE_NAME)

    try:
        await context.sessions.destroy(token)
    except SupabaseClientError as e:
        logger.error(f"Error destroying session: {e}")
        raise LogoutFailedError() from e

    clear_session_cookie(response, context.settings)
    return MessageResponse(message="Logout successful")


@router.get(
    "/check-auth",
    response_model=CheckAuthResponse,
    responses={401: {"description": "No valid session"}},
)
async def check_auth(user: OptionalUser):
    """
    Report whether the caller is signed in.

    Read-only: never creates, extends or removes a session.
    """
    if user is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"authenticated": False, "message": "Unauthorized"},
        )
    return CheckAuthResponse(authenticated=True, user=user)
