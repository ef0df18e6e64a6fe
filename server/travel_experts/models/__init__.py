"""Models module exporting all database models."""

from .agency import Agency, Agent
from .booking import Booking
from .customer import Customer
from .package import Package
from .trip_type import TripType

__all__ = [
    # Catalog entities
    "Package",
    "Agency",
    "Agent",

    # Booking entities
    "Customer",
    "Booking",
    "TripType",
]
