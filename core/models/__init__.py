# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Signup/login inputs and the stored user record
# - session.py: Login session record and the minimal session identity
# - ledger.py: Income/expense entry schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models - Credential store
# -----------------------------------------------------------------------------
from .user import (
    LoginRequest,
    SignupRequest,
    UserRecord,
    normalize_email,
)

# -----------------------------------------------------------------------------
# Session Models - Session authority
# -----------------------------------------------------------------------------
from .session import (
    SessionRecord,
    SessionUser,
)

# -----------------------------------------------------------------------------
# Ledger Models - Incomes and expenses
# -----------------------------------------------------------------------------
from .ledger import (
    LedgerEntry,
    LedgerEntryCreate,
    LedgerKind,
)

__all__ = [
    # User
    "LoginRequest",
    "SignupRequest",
    "UserRecord",
    "normalize_email",
    # Session
    "SessionRecord",
    "SessionUser",
    # Ledger
    "LedgerEntry",
    "LedgerEntryCreate",
    "LedgerKind",
]
