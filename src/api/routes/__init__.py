"""API routes package."""

from .admin_order_routes import router as admin_order_router
from .health_routes import router as health_router
from .search_routes import router as search_router

__all__ = ["health_router", "search_router", "admin_order_router"]
