# =============================================================================
# core/models/ledger.py - Ledger Entry Schemas
# =============================================================================
# Income and expense entries share one shape and live in separate tables:
# - LedgerKind: Enum selecting the table (incomes / expenses)
# - LedgerEntryCreate: Input for add-income / add-expense
# - LedgerEntry: Output when listing entries
#
# Every entry is owned by exactly one user (user_id). The owner is always
# taken from the session, never from the request body; unknown fields such
# as a client-supplied "user_id" are ignored by LedgerEntryCreate.
# =============================================================================

import datetime as dt
import math
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Plain decimal or exponent notation; no underscores, "nan" or "inf"
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class LedgerKind(str, Enum):
    """
    The two kinds of ledger entry.

    - income: money coming in (stored in `incomes`)
    - expense: money going out (stored in `expenses`)
    """
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def table(self) -> str:
        """Table holding entries of this kind."""
        return f"{self.value}s"

    @property
    def label(self) -> str:
        """Human-readable name used in response messages."""
        return self.value.capitalize()


class LedgerEntryCreate(BaseModel):
    """
    Schema for adding an income or expense entry.

    Only presence and type are checked: description, date and category must
    be present and non-empty, amount must be a finite number. Sign and
    currency are not validated.

    Example:
        {
            "description": "salary",
            "date": "2024-01-01",
            "amount": 1000,
            "category": "job"
        }
    """

    model_config = ConfigDict(extra="ignore")

    description: str = Field(
        ...,
        min_length=1,
        description="What the money was for"
    )

    # Calendar date, ISO format (YYYY-MM-DD)
    date: dt.date = Field(
        ...,
        description="Date of the transaction"
    )

    # JSON numbers and numeric strings are accepted ("1000" -> 1000.0)
    amount: float = Field(
        ...,
        allow_inf_nan=False,
        description="Amount of money (sign/currency not validated)"
    )

    category: str = Field(
        ...,
        min_length=1,
        description="Free-form category label"
    )

    @field_validator("description", "category")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def reject_non_numeric(cls, value: Any) -> Any:
        # bool is an int subclass; "" and None are not amounts
        if isinstance(value, bool) or value is None:
            raise ValueError("amount must be a number")
        if isinstance(value, str):
            value = value.strip()
            if not _DECIMAL_RE.fullmatch(value):
                raise ValueError("amount must be a number")
            parsed = float(value)
            if not math.isfinite(parsed):
                raise ValueError("amount must be a finite number")
            return parsed
        return value

    def to_row(self, *, entry_id: str, user_id: str, created_at: dt.datetime) -> dict[str, Any]:
        """Build the stored row, stamping owner and id from the server side."""
        return {
            "id": entry_id,
            "user_id": user_id,
            "description": self.description,
            "date": self.date.isoformat(),
            "amount": self.amount,
            "category": self.category,
            "created_at": created_at.isoformat(),
        }


class LedgerEntry(BaseModel):
    """
    Schema for returning an entry to its owner.

    Returned by GET /incomes and GET /expenses.
    """

    id: str
    user_id: str
    description: str
    date: dt.date
    amount: float
    category: str
    created_at: dt.datetime | None = None
