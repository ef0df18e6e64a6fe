"""Customer model definition."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base

if TYPE_CHECKING:
    from .booking import Booking


class Customer(Base):
    """Customer entity holding identity and contact details."""

    __tablename__ = "customers"

    # Primary key
    customer_id: Mapped[int] = mapped_column("CustomerId", Integer, primary_key=True, autoincrement=True)

    # Identity
    cust_first_name: Mapped[str] = mapped_column("CustFirstName", String(25), nullable=False)
    cust_last_name: Mapped[str] = mapped_column("CustLastName", String(25), nullable=False)
    cust_email: Mapped[str] = mapped_column("CustEmail", String(50), nullable=False, index=True)

    # Contact details
    cust_address: Mapped[str | None] = mapped_column("CustAddress", String(75), nullable=True)
    cust_city: Mapped[str | None] = mapped_column("CustCity", String(50), nullable=True)
    cust_prov: Mapped[str | None] = mapped_column("CustProv", String(2), nullable=True)
    cust_postal: Mapped[str | None] = mapped_column("CustPostal", String(7), nullable=True)
    cust_country: Mapped[str | None] = mapped_column("CustCountry", String(25), nullable=True)
    cust_home_phone: Mapped[str | None] = mapped_column("CustHomePhone", String(20), nullable=True)
    cust_bus_phone: Mapped[str | None] = mapped_column("CustBusPhone", String(20), nullable=True)

    # Assigned agent, left empty for self-registered customers
    agent_id: Mapped[int | None] = mapped_column(
        "AgentId",
        Integer,
        ForeignKey("agents.AgentId"),
        nullable=True
    )

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="customer")

    def __repr__(self) -> str:
        return (
            f"<Customer(id={self.customer_id}, name='{self.cust_first_name} {self.cust_last_name}')>"
        )
