# =============================================================================
# core/services/user_service.py - Credential Store
# =============================================================================
# Handles signup and credential checks against the users table.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
import secrets

from app.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from core.models.user import UserRecord, normalize_email
from lib.passwords import (
    DEFAULT_ROUNDS,
    hash_password,
    hash_password_async,
    verify_password_async,
)
from lib.supabase_client import SupabaseStore
from lib.utils import new_id, utc_now

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


class UserService:
    """
    Service for user identity operations.

    Users are append-only: created on signup, never updated or deleted.
    Emails are unique; the lookup before insert is the uniqueness check.
    """

    def __init__(self, store: SupabaseStore, *, bcrypt_rounds: int = DEFAULT_ROUNDS):
        self._store = store
        self._bcrypt_rounds = bcrypt_rounds
        # Compared against for unknown emails
        self._decoy_hash = hash_password(secrets.token_urlsafe(16), bcrypt_rounds)

    async def get_by_email(self, email: str) -> UserRecord | None:
        row = await self._store.find_one(
            USERS_TABLE, filters={"email": normalize_email(email)}
        )
        return UserRecord(**row) if row else None

    async def signup(self, name: str, email: str, password: str) -> UserRecord:
        """
        Register a new user.

        Args:
            name: Display name
            email: Login email (normalized before storage)
            password: Plaintext password, hashed with bcrypt before storage

        Returns:
            The stored UserRecord

        Raises:
            UserAlreadyExistsError: If the email is already registered
            SupabaseClientError: If the store fails
        """
        email = normalize_email(email)

        if await self.get_by_email(email) is not None:
            logger.info(f"Signup rejected, email already registered: {email}")
            raise UserAlreadyExistsError()

        password_hash = await hash_password_async(password, self._bcrypt_rounds)
        user = UserRecord(
            id=new_id(),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=utc_now(),
        )

        await self._store.insert(USERS_TABLE, user.model_dump(mode="json"))
        logger.info(f"Created user: {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> UserRecord:
        """
        Check an email/password pair.

        Unknown emails and wrong passwords raise the same error, and both
        run one bcrypt comparison, so neither the response nor its timing
        reveals whether an account exists.

        Raises:
            InvalidCredentialsError: If the credentials don't match
            SupabaseClientError: If the store fails
        """
        user = await self.get_by_email(email)
        password_hash = user.password_hash if user else self._decoy_hash
        matched = await verify_password_async(password, password_hash)

        if user is None or not matched:
            logger.info(f"Failed login for: {normalize_email(email)}")
            raise InvalidCredentialsError()

        return user
