"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_monitor import __version__
from portfolio_monitor.app_context import AppContext
from portfolio_monitor.config.logging_config import setup_logging
from portfolio_monitor.config.settings import get_settings
from portfolio_monitor.api.routers import portfolio_router, status_router
from portfolio_monitor.api.schemas import ErrorResponse
from portfolio_monitor.core.exceptions import AppError

logger = logging.getLogger(__name__)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Prebuilt context (tests). If omitted, one is built from
            settings at startup.
    """
    settings = context.settings if context is not None else get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        setup_logging()
        ctx = context or AppContext(settings=settings)
        # A portfolio that cannot be loaded aborts startup
        ctx.start()
        app.state.context = ctx
        logger.info("%s ready", settings.app_name)
        yield
        # Shutdown
        ctx.close()

    app = FastAPI(
        title=settings.app_name,
        description="Portfolio holdings with periodically refreshed market data",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(portfolio_router)
    app.include_router(status_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.code, message=exc.message).model_dump(),
        )

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()
