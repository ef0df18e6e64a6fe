"""Trip type lookup model definition."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class TripType(Base):
    """Trip type lookup entry (e.g. 'L' for Leisure, 'B' for Business)."""

    __tablename__ = "triptypes"

    trip_type_id: Mapped[str] = mapped_column("TripTypeId", String(1), primary_key=True)
    tt_name: Mapped[str | None] = mapped_column("TTName", String(25), nullable=True)

    def __repr__(self) -> str:
        return f"<TripType(id='{self.trip_type_id}', name='{self.tt_name}')>"
