# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the SpendSmart API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import routes as auth_routes
from app.config import Settings, settings
from app.context import AppContext
from app.exceptions import (
    SpendSmartException,
    spendsmart_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)
from app.routers import health, ledger
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    context: AppContext | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Pre-built application context. When omitted, the lifespan
            handler connects to Supabase at startup, before any request is
            accepted.
        app_settings: Settings to use (defaults to the global settings)

    Returns:
        The configured FastAPI app
    """
    cfg = app_settings or (context.settings if context else settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: connect the store and build the application context
        - Shutdown: log and release the context
        """
        logger.info(f"Starting SpendSmart API in {cfg.ENVIRONMENT} mode")
        logger.info(f"CORS origins: {cfg.cors_origins_list}")

        if getattr(app.state, "context", None) is None:
            app.state.context = await AppContext.connect(cfg)

        yield

        logger.info("Shutting down SpendSmart API")

    app = FastAPI(
        title="SpendSmart API",
        description="Personal finance tracking: session login plus per-user incomes and expenses.",
        version=health.API_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Signup, login, logout and session checks"},
            {"name": "Incomes", "description": "Record and list income entries"},
            {"name": "Expenses", "description": "Record and list expense entries"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )
    app.state.context = context

    # =========================================================================
    # Middleware
    # =========================================================================

    # Must be registered before CORSMiddleware; 500s need CORS headers too
    @app.middleware("http")
    async def handle_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"Unexpected error: {exc}")
            return JSONResponse(
                status_code=500,
                content={
                    "message": "Server error",
                    "code": "INTERNAL_ERROR",
                }
            )

    # Only the configured front-end may call the API with credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(SpendSmartException, spendsmart_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SupabaseClientError, store_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(auth_routes.router, tags=["Auth"])
    app.include_router(ledger.incomes_router, tags=["Incomes"])
    app.include_router(ledger.expenses_router, tags=["Expenses"])
    app.include_router(health.router, tags=["Health"])

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "SpendSmart API",
            "version": health.API_VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
