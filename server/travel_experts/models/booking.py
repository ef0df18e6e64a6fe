"""Booking model definition."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base

if TYPE_CHECKING:
    from .customer import Customer
    from .package import Package
    from .trip_type import TripType


class Booking(Base):
    """Booking entity representing a customer's reservation against a package."""

    __tablename__ = "bookings"

    # Primary key
    booking_id: Mapped[int] = mapped_column("BookingId", Integer, primary_key=True, autoincrement=True)

    # Booking details
    booking_date: Mapped[datetime] = mapped_column("BookingDate", DateTime, nullable=False)
    booking_no: Mapped[str] = mapped_column("BookingNo", String(50), nullable=False, unique=True, index=True)
    traveler_count: Mapped[int] = mapped_column("TravelerCount", Integer, nullable=False)

    # Foreign keys
    customer_id: Mapped[int] = mapped_column(
        "CustomerId",
        Integer,
        ForeignKey("customers.CustomerId"),
        nullable=False,
        index=True
    )
    trip_type_id: Mapped[str] = mapped_column(
        "TripTypeId",
        String(1),
        ForeignKey("triptypes.TripTypeId"),
        nullable=False
    )
    package_id: Mapped[int] = mapped_column(
        "PackageId",
        Integer,
        ForeignKey("packages.PackageId"),
        nullable=False,
        index=True
    )

    # Constraints
    __table_args__ = (
        CheckConstraint('"TravelerCount" > 0', name="ck_booking_traveler_count_positive"),
        CheckConstraint('length("BookingNo") > 0', name="ck_booking_no_not_empty"),
    )

    # Relationships
    customer: Mapped["Customer"] = relationship("Customer", back_populates="bookings")
    package: Mapped["Package"] = relationship("Package", back_populates="bookings")
    trip_type: Mapped["TripType"] = relationship("TripType")

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.booking_id}, no='{self.booking_no}', customer_id={self.customer_id}, "
            f"package_id={self.package_id}, travelers={self.traveler_count})>"
        )
