"""Travel package model definition."""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base

if TYPE_CHECKING:
    from .booking import Booking


class Package(Base):
    """Package entity representing a sellable travel offering."""

    __tablename__ = "packages"

    # Primary key
    package_id: Mapped[int] = mapped_column("PackageId", Integer, primary_key=True, autoincrement=True)

    # Package information
    pkg_name: Mapped[str] = mapped_column("PkgName", String(50), nullable=False, index=True)
    pkg_start_date: Mapped[datetime | None] = mapped_column("PkgStartDate", DateTime, nullable=True, index=True)
    pkg_end_date: Mapped[datetime | None] = mapped_column("PkgEndDate", DateTime, nullable=True, index=True)
    pkg_desc: Mapped[str | None] = mapped_column("PkgDesc", String(50), nullable=True)

    # Pricing
    pkg_base_price: Mapped[Decimal] = mapped_column("PkgBasePrice", Numeric(19, 4), nullable=False)
    pkg_agency_commission: Mapped[Decimal | None] = mapped_column(
        "PkgAgencyCommission",
        Numeric(19, 4),
        nullable=True
    )

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="package")

    def __repr__(self) -> str:
        return (
            f"<Package(id={self.package_id}, name='{self.pkg_name}', "
            f"start={self.pkg_start_date}, end={self.pkg_end_date})>"
        )
