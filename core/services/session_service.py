# =============================================================================
# core/services/session_service.py - Session Authority
# =============================================================================
# Issues, resolves and destroys login sessions.
#
# A session is a row in the `sessions` table keyed by a random id. The
# cookie carries that id signed with the session secret, so a forged or
# altered cookie is rejected before the store is ever queried. Keeping the
# record in the database means sessions survive process restarts.
# =============================================================================

import logging
import secrets
from datetime import datetime, timedelta

from itsdangerous import BadSignature, TimestampSigner

from core.models.session import SessionRecord, SessionUser
from lib.supabase_client import SupabaseStore
from lib.utils import utc_now

logger = logging.getLogger(__name__)

SESSIONS_TABLE = "sessions"
DEFAULT_MAX_AGE_SECONDS = 24 * 60 * 60


class SessionService:
    """
    Service for login session management.

    Contract:
        create(user) -> token
        resolve(token) -> SessionUser | None (read-only)
        destroy(token) -> None (raises SupabaseClientError on store failure)
        purge_expired() -> number of expired records removed
    """

    def __init__(
        self,
        store: SupabaseStore,
        *,
        secret: str,
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
        salt: str = "spendsmart.session",
    ):
        self._store = store
        self._signer = TimestampSigner(secret, salt=salt)
        self.max_age_seconds = max_age_seconds

    def _unsign(self, token: str) -> str | None:
        """Return the session id inside a cookie token, or None if it's invalid."""
        if not token:
            return None
        try:
            # SignatureExpired is a BadSignature subclass
            session_id = self._signer.unsign(token, max_age=self.max_age_seconds)
        except BadSignature:
            return None
        return session_id.decode("utf-8")

    async def create(self, user: SessionUser) -> str:
        """
        Start a session for an authenticated user.

        Only the minimal identity (id, name) is stored.
        Expired sessions of any user are swept first, so abandoned
        sessions do not pile up in the table.

        Returns:
            The signed token to hand to the client as the session cookie

        Raises:
            SupabaseClientError: If the session could not be stored
        """
        now = utc_now()
        record = SessionRecord(
            id=secrets.token_urlsafe(32),
            user_id=user.id,
            user_name=user.name,
            created_at=now,
            expires_at=now + timedelta(seconds=self.max_age_seconds),
        )

        await self.purge_expired(now)
        await self._store.insert(SESSIONS_TABLE, record.model_dump(mode="json"))
        logger.info(f"Created session for user: {user.id}")

        return self._signer.sign(record.id).decode("utf-8")

    async def resolve(self, token: str | None) -> SessionUser | None:
        """
        Look up the user behind a session token.

        Returns None for missing, tampered or expired tokens and for
        sessions that no longer exist. Never writes to the store; expired
        records are left for purge_expired().

        Raises:
            SupabaseClientError: If the store fails (not the same as "no session")
        """
        session_id = self._unsign(token or "")
        if session_id is None:
            return None

        row = await self._store.find_one(SESSIONS_TABLE, filters={"id": session_id})
        if row is None:
            return None

        record = SessionRecord(**row)
        if record.is_expired(utc_now()):
            logger.debug(f"Session expired for user: {record.user_id}")
            return None

        return record.to_user()

    async def destroy(self, token: str | None) -> None:
        """
        End a session.

        Succeeds when the token is malformed or the session is already gone.

        Raises:
            SupabaseClientError: If the store fails
        """
        session_id = self._unsign(token or "")
        if session_id is None:
            return

        removed = await self._store.delete(SESSIONS_TABLE, filters={"id": session_id})
        if removed:
            logger.info("Destroyed session")

    async def purge_expired(self, now: datetime | None = None) -> int:
        """
        Remove every session record whose expiry has passed.

        Returns:
            Number of records removed

        Raises:
            SupabaseClientError: If the store fails
        """
        removed = await self._store.delete_before(
            SESSIONS_TABLE,
            column="expires_at",
            cutoff=(now or utc_now()).isoformat(),
        )
        if removed:
            logger.info(f"Purged {removed} expired sessions")
        return removed
