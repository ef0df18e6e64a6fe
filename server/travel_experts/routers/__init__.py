"""FastAPI routers package."""

from .booking import router as booking_router
from .catalog import router as catalog_router
from .customer import router as customer_router
from .metrics import router as metrics_router

__all__ = [
    "booking_router",
    "catalog_router",
    "customer_router",
    "metrics_router",
]
