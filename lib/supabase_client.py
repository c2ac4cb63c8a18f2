# =============================================================================
# lib/supabase_client.py - Supabase Store Wrapper
# =============================================================================
# This module provides a small async wrapper around the Supabase (PostgREST)
# client. Every table in the application is accessed through the same six
# operations:
# - insert: append one row
# - find / find_one: equality-filtered reads
# - delete: equality-filtered removal
# - delete_before: range removal (e.g. expired rows)
# - ping: connectivity probe for readiness checks
#
# The wrapper is an instance (not a module-level singleton). One instance is
# created at startup and shared through the application context.
#
# Usage:
#   store = await SupabaseStore.connect(url, key)
#   rows = await store.find("incomes", filters={"user_id": user_id})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import AsyncClient, acreate_client

from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Raised for any failure of the underlying driver: network errors,
    PostgREST errors, permission problems. Callers never see driver
    exceptions directly.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class SupabaseStore:
    """
    Typed async wrapper for Supabase table operations.

    Filters are plain equality matches (``column = value``), which is all the
    application needs: users by email, sessions by id, ledger entries by
    owner.

    Example:
        store = await SupabaseStore.connect(settings.SUPABASE_URL, key)

        await store.insert("users", {"id": "...", "email": "a@x.com"})
        user = await store.find_one("users", filters={"email": "a@x.com"})
    """

    def __init__(self, client: AsyncClient):
        self._client = client

    @classmethod
    async def connect(cls, url: str, key: str) -> SupabaseStore:
        """
        Create the async Supabase client.

        Uses the service_role key which bypasses Row Level Security (RLS).
        Ownership filtering is enforced by the service layer instead.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            client = await acreate_client(url, key)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
            ) from e

        logger.info("Supabase client initialized successfully")
        return cls(client)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it as stored.

        Raises:
            SupabaseClientError: If the insert fails
        """
        try:
            response = await self._client.table(table).insert(row).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                suggestion=f"Check that the {table} table exists and accepts this row",
                details={"table": table},
            ) from e

        data = response.data or []
        logger.debug(f"Inserted row into {table}")
        return data[0] if data else dict(row)

    async def delete(self, table: str, *, filters: dict[str, Any]) -> int:
        """
        Delete rows matching all filters.

        Returns:
            Number of rows removed (0 when nothing matched)

        Raises:
            SupabaseClientError: If the delete fails
        """
        if not filters:
            raise ValueError("delete() requires at least one filter")

        try:
            query = self._client.table(table).delete()
            for column, value in filters.items():
                query = query.eq(column, value)
            response = await query.execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "filters": list(filters)},
            ) from e

        return len(response.data or [])

    async def delete_before(self, table: str, *, column: str, cutoff: str) -> int:
        """
        Delete rows whose `column` is strictly less than `cutoff`.

        Used to sweep rows past a timestamp (e.g. expired sessions).

        Returns:
            Number of rows removed

        Raises:
            SupabaseClientError: If the delete fails
        """
        try:
            response = await self._client.table(table).delete().lt(column, cutoff).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "column": column},
            ) from e

        return len(response.data or [])

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def find(
        self,
        table: str,
        *,
        filters: dict[str, Any],
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows matching all filters.

        Args:
            table: Table name
            filters: Column -> value equality filters
            order_by: Optional column to sort ascending on
            limit: Optional maximum number of rows

        Returns:
            List of row dicts (empty if nothing matched)

        Raises:
            SupabaseClientError: If the query fails
        """
        try:
            query = self._client.table(table).select("*")
            for column, value in filters.items():
                query = query.eq(column, value)
            if order_by:
                query = query.order(order_by)
            if limit:
                query = query.limit(limit)
            response = await query.execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to query {table}: {e}",
                code="QUERY_FAILED",
                suggestion=f"Check that the {table} table is accessible",
                details={"table": table, "filters": list(filters)},
            ) from e

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} rows from {table}")
        return rows

    async def find_one(
        self,
        table: str,
        *,
        filters: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Fetch the first row matching all filters, or None."""
        rows = await self.find(table, filters=filters, limit=1)
        return rows[0] if rows else None

    async def ping(self, table: str = "users") -> None:
        """
        Cheap connectivity probe used by the readiness endpoint.

        Raises:
            SupabaseClientError: If the database is unreachable
        """
        try:
            await self._client.table(table).select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database ping failed: {e}",
                code="PING_FAILED",
            ) from e
