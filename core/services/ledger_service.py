# =============================================================================
# core/services/ledger_service.py - Ledger Store
# =============================================================================
# Handles listing and adding income/expense entries.
#
# One LedgerService instance serves one LedgerKind. Every read is filtered
# by owner and every write is stamped with the owner passed in by the
# caller (the authenticated session), so users never see or create each
# other's entries.
# =============================================================================

import logging

from core.models.ledger import LedgerEntry, LedgerEntryCreate, LedgerKind
from lib.supabase_client import SupabaseStore
from lib.utils import new_id, utc_now

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Service for one kind of ledger entry.

    Example:
        incomes = LedgerService(store, LedgerKind.INCOME)
        await incomes.add_entry(user.id, LedgerEntryCreate(...))
        entries = await incomes.list_entries(user.id)
    """

    def __init__(self, store: SupabaseStore, kind: LedgerKind):
        self._store = store
        self.kind = kind

    async def list_entries(self, owner_id: str) -> list[LedgerEntry]:
        """
        List all entries owned by a user, oldest first.

        Raises:
            SupabaseClientError: If the store fails
        """
        rows = await self._store.find(
            self.kind.table,
            filters={"user_id": owner_id},
            order_by="created_at",
        )
        return [LedgerEntry(**row) for row in rows]

    async def add_entry(self, owner_id: str, entry: LedgerEntryCreate) -> None:
        """
        Store a new entry for a user.

        The generated id is not returned; callers re-list to see it.

        Raises:
            SupabaseClientError: If the store fails
        """
        row = entry.to_row(entry_id=new_id(), user_id=owner_id, created_at=utc_now())
        await self._store.insert(self.kind.table, row)
        logger.info(f"Added {self.kind.value} {row['id']} for user: {owner_id}")
