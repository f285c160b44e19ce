"""API route modules."""

from src.api.routes.activity import router as activity_router
from src.api.routes.health import router as health_router
from src.api.routes.inventory import router as inventory_router
from src.api.routes.roster import components_router, technicians_router
from src.api.routes.settings import router as settings_router
from src.api.routes.tools import router as tools_router
from src.api.routes.work_orders import router as work_orders_router

__all__ = [
    "health_router",
    "work_orders_router",
    "inventory_router",
    "tools_router",
    "technicians_router",
    "components_router",
    "activity_router",
    "settings_router",
]
