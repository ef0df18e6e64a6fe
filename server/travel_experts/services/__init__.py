"""Service layer package."""

from .booking_service import BookingService
from .catalog_service import CatalogService
from .customer_service import CustomerService

__all__ = [
    "BookingService",
    "CatalogService",
    "CustomerService",
]
