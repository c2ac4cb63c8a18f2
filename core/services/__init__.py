# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .session_service import SessionService
from .ledger_service import LedgerService

__all__ = [
    "UserService",
    "SessionService",
    "LedgerService",
]
