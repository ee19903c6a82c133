"""API routers package."""

from portfolio_monitor.api.routers.portfolio import router as portfolio_router
from portfolio_monitor.api.routers.status import router as status_router

__all__ = [
    "portfolio_router",
    "status_router",
]
