# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - ledger.py: Income and expense endpoints (built per LedgerKind)
#
# Authentication routes live in app/auth/routes.py.
# Each router is mounted in main.py.
# =============================================================================

from . import health
from . import ledger

__all__ = [
    "health",
    "ledger",
]
