# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the SpendSmart API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_user_service.py / test_session_service.py: Service unit tests
# - test_supabase_client.py: Store wrapper against a mocked client
# - test_auth_routes.py / test_ledger_routes.py: API endpoint tests
# - test_app.py: Settings, health, CORS and startup wiring
#
# Run tests with: poetry run pytest
# =============================================================================
