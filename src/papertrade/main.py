"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from papertrade.app_context import AppContext
from papertrade.config.settings import Settings, get_settings
from papertrade.config.logging_config import setup_logging
from papertrade.api.routers import portfolio_router, orders_router, market_router
from papertrade.core.exceptions import AppError


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """
    Build the application around one AppContext.

    Tests pass their own settings (or a prebuilt context); the module-level
    app uses the environment.
    """
    settings = settings or (context.settings if context else get_settings())
    context = context or AppContext(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        setup_logging(settings)
        context.initialize()
        yield
        # Shutdown
        context.close()

    app = FastAPI(
        title=settings.app_name,
        description="Paper trading: simulated orders, positions and portfolio valuation",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.context = context

    # Include routers
    app.include_router(portfolio_router)
    app.include_router(orders_router)
    app.include_router(market_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"ok": False, "error": exc.code, "message": exc.message},
        )

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()
