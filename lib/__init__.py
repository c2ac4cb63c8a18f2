# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Async Supabase table wrapper (the document store)
# - passwords.py: bcrypt password hashing
# - utils.py: Shared utilities (ids, timestamps, base error)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseStore, SupabaseClientError
from lib.passwords import (
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)
from lib.utils import ApplicationError, new_id, utc_now

__all__ = [
    # Supabase
    "SupabaseStore",
    "SupabaseClientError",
    # Passwords
    "hash_password",
    "hash_password_async",
    "verify_password",
    "verify_password_async",
    # Utils
    "ApplicationError",
    "new_id",
    "utc_now",
]
