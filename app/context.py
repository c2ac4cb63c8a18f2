# =============================================================================
# app/context.py - Application Context
# =============================================================================
# Everything a request handler needs, built once at startup:
# - the store (Supabase connection)
# - the services wired to that store
#
# The context lives on `app.state.context` and reaches handlers through
# `Depends(get_context)` (see app/dependencies.py). Tests build one around
# an in-memory store with `AppContext.build(...)`.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.config import Settings
from core.models.ledger import LedgerKind
from core.services import LedgerService, SessionService, UserService
from lib.supabase_client import SupabaseStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContext:
    """Store connection plus the services built on top of it."""

    settings: Settings
    store: SupabaseStore
    users: UserService
    sessions: SessionService
    incomes: LedgerService
    expenses: LedgerService

    @classmethod
    def build(cls, settings: Settings, store: SupabaseStore) -> AppContext:
        """Wire all services to an already-connected store."""
        return cls(
            settings=settings,
            store=store,
            users=UserService(store, bcrypt_rounds=settings.BCRYPT_ROUNDS),
            sessions=SessionService(
                store,
                secret=settings.SESSION_SECRET,
                max_age_seconds=settings.SESSION_MAX_AGE_SECONDS,
            ),
            incomes=LedgerService(store, LedgerKind.INCOME),
            expenses=LedgerService(store, LedgerKind.EXPENSE),
        )

    @classmethod
    async def connect(cls, settings: Settings) -> AppContext:
        """
        Connect to Supabase and build the context.

        Raises:
            SupabaseClientError: If the client cannot be created
        """
        store = await SupabaseStore.connect(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY,
        )
        return cls.build(settings, store)

    def ledger(self, kind: LedgerKind) -> LedgerService:
        """Service for the given entry kind."""
        return self.incomes if kind is LedgerKind.INCOME else self.expenses
