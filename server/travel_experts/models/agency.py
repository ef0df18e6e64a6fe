"""Agency and Agent model definitions."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base


class Agency(Base):
    """Agency entity representing a physical office."""

    __tablename__ = "agencies"

    # Primary key
    agency_id: Mapped[int] = mapped_column("AgencyId", Integer, primary_key=True, autoincrement=True)

    # Address and contact
    agncy_address: Mapped[str | None] = mapped_column("AgncyAddress", String(50), nullable=True)
    agncy_city: Mapped[str | None] = mapped_column("AgncyCity", String(50), nullable=True)
    agncy_prov: Mapped[str | None] = mapped_column("AgncyProv", String(50), nullable=True)
    agncy_postal: Mapped[str | None] = mapped_column("AgncyPostal", String(50), nullable=True)
    agncy_country: Mapped[str | None] = mapped_column("AgncyCountry", String(50), nullable=True)
    agncy_phone: Mapped[str | None] = mapped_column("AgncyPhone", String(50), nullable=True)
    agncy_fax: Mapped[str | None] = mapped_column("AgncyFax", String(50), nullable=True)

    # Relationships
    agents: Mapped[list["Agent"]] = relationship("Agent", back_populates="agency")

    def __repr__(self) -> str:
        return f"<Agency(id={self.agency_id}, city='{self.agncy_city}')>"


class Agent(Base):
    """Agent entity representing a member of an agency's staff."""

    __tablename__ = "agents"

    # Primary key
    agent_id: Mapped[int] = mapped_column("AgentId", Integer, primary_key=True, autoincrement=True)

    # Agent details
    agt_first_name: Mapped[str | None] = mapped_column("AgtFirstName", String(20), nullable=True)
    agt_middle_initial: Mapped[str | None] = mapped_column("AgtMiddleInitial", String(5), nullable=True)
    agt_last_name: Mapped[str | None] = mapped_column("AgtLastName", String(20), nullable=True)
    agt_bus_phone: Mapped[str | None] = mapped_column("AgtBusPhone", String(20), nullable=True)
    agt_email: Mapped[str | None] = mapped_column("AgtEmail", String(50), nullable=True)
    agt_position: Mapped[str | None] = mapped_column("AgtPosition", String(20), nullable=True)

    # Foreign key to agency
    agency_id: Mapped[int | None] = mapped_column(
        "AgencyId",
        Integer,
        ForeignKey("agencies.AgencyId"),
        nullable=True,
        index=True
    )

    # Relationships
    agency: Mapped["Agency | None"] = relationship("Agency", back_populates="agents")

    def __repr__(self) -> str:
        return (
            f"<Agent(id={self.agent_id}, name='{self.agt_first_name} {self.agt_last_name}', "
            f"agency_id={self.agency_id})>"
        )
