"""Booking-related Pydantic schemas."""

import re
from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator

from .common import ContactFields, WireModel, normalize_text

# Plain ASCII digits that fit the integer key column
NUMERIC_ID = re.compile(r"[0-9]{1,9}")


class CreateBookingRequest(ContactFields):
    """
    Request schema for placing a booking.

    The package may be referenced by `PackageId` or by name (`PkgName`, or
    `package` as sent by the order form). `TravelerCount` is coerced rather
    than rejected: anything absent or non-numeric means one traveler.
    """

    traveler_count: int = Field(1, alias="TravelerCount")
    package_id: Optional[str] = Field(None, alias="PackageId")
    pkg_name: Optional[str] = Field(
        None,
        alias="PkgName",
        validation_alias=AliasChoices("PkgName", "package", "pkg_name"),
        max_length=50,
    )

    @field_validator("traveler_count", mode="before")
    @classmethod
    def coerce_traveler_count(cls, v: Any) -> int:
        """Coerce to a positive integer, defaulting to 1."""
        if isinstance(v, bool):
            return 1
        try:
            count = int(float(v))
        except (TypeError, ValueError, OverflowError):
            return 1
        return max(count, 1)

    @field_validator("package_id", "pkg_name", mode="before")
    @classmethod
    def normalize_package_reference(cls, v: Any) -> Any:
        """Strip package references; empty strings count as absent."""
        return normalize_text(v)

    def package_reference(self) -> tuple[Optional[int], Optional[str]]:
        """
        Split the package reference into an id or a name.

        Returns:
            (package_id, None) when a numeric id was given, (None, name) when
            only a name is available, (None, None) when neither is present.
        """
        if self.package_id:
            if NUMERIC_ID.fullmatch(self.package_id):
                return int(self.package_id), None
            return None, self.package_id
        if self.pkg_name:
            return None, self.pkg_name
        return None, None

    def missing_fields(self) -> list[str]:
        """Return the wire names of required fields that are absent."""
        missing = self.missing_contact_fields()
        if self.package_reference() == (None, None):
            missing.append("PackageId")
        return missing


class BookingConfirmation(WireModel):
    """Booking echo returned to the client after a successful order."""

    booking_no: str = Field(..., alias="BookingNo")
    pkg_name: str = Field(..., alias="PkgName")
    booking_date: datetime = Field(..., alias="BookingDate")
    traveler_count: int = Field(..., ge=1, alias="TravelerCount")
    cust_first_name: str = Field(..., alias="CustFirstName")
    cust_last_name: str = Field(..., alias="CustLastName")
    cust_email: str = Field(..., alias="CustEmail")

    # Generated keys, kept for logging and never sent to the client
    booking_id: Optional[int] = Field(None, exclude=True)
    customer_id: Optional[int] = Field(None, exclude=True)
    package_id: Optional[int] = Field(None, exclude=True)


class BookingResponse(WireModel):
    """Envelope for a created booking."""

    ok: bool = True
    booking: BookingConfirmation
