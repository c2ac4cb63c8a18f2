# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain logic:
# - models/: Pydantic schemas for users, sessions and ledger entries
# - services/: Credential store, session authority and ledger store
#
# Services talk to storage only through lib.supabase_client.SupabaseStore,
# so tests can swap in an in-memory store.
# =============================================================================
