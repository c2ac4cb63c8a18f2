# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.context import AppContext


def get_context(request: Request) -> AppContext:
    """
    Get the application context.

    Built once by the lifespan handler (or injected by tests) and stored
    on app.state.
    """
    return request.app.state.context


# Type alias for dependency injection
ContextDep = Annotated[AppContext, Depends(get_context)]
