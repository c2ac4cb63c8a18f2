# =============================================================================
# app/routers/ledger.py - Income & Expense Endpoints
# =============================================================================
# Incomes and expenses expose the same two operations, so both routers are
# built by one factory:
#
#   GET  /incomes       POST /add-income
#   GET  /expenses      POST /add-expense
#
# All endpoints require authentication. The owner of every entry is the
# session user; the body cannot choose it.
# =============================================================================

from fastapi import APIRouter, status

from app.auth import CurrentUser, MessageResponse
from app.dependencies import ContextDep
from core.models.ledger import LedgerEntry, LedgerEntryCreate, LedgerKind


def build_ledger_router(kind: LedgerKind) -> APIRouter:
    """
    Create the list/add router for one kind of entry.

    Args:
        kind: LedgerKind.INCOME or LedgerKind.EXPENSE

    Returns:
        APIRouter with GET /{kind}s and POST /add-{kind}
    """
    router = APIRouter()

    async def list_entries(user: CurrentUser, context: ContextDep) -> list[LedgerEntry]:
        return await context.ledger(kind).list_entries(user.id)

    async def add_entry(
        entry: LedgerEntryCreate,
        user: CurrentUser,
        context: ContextDep,
    ) -> MessageResponse:
        await context.ledger(kind).add_entry(user.id, entry)
        return MessageResponse(message=f"{kind.label} added successfully")

    list_entries.__doc__ = f"List the current user's {kind.value} entries, oldest first."
    add_entry.__doc__ = (
        f"Add a {kind.value} entry for the current user.\n\n"
        "Requires description, date, amount (number) and category."
    )

    router.add_api_route(
        f"/{kind.table}",
        list_entries,
        methods=["GET"],
        response_model=list[LedgerEntry],
        name=f"list_{kind.table}",
    )
    router.add_api_route(
        f"/add-{kind.value}",
        add_entry,
        methods=["POST"],
        response_model=MessageResponse,
        status_code=status.HTTP_201_CREATED,
        name=f"add_{kind.value}",
    )
    return router


incomes_router = build_ledger_router(LedgerKind.INCOME)
expenses_router = build_ledger_router(LedgerKind.EXPENSE)
