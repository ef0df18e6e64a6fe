"""Common Pydantic schemas."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WireModel(BaseModel):
    """Base for schemas whose JSON names are the store's column names."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump using the wire (column) names in JSON-compatible types."""
        return self.model_dump(by_alias=True, mode="json")


class ContactFields(WireModel):
    """Customer identity and contact fields shared by registration and booking."""

    cust_first_name: Optional[str] = Field(None, alias="CustFirstName", max_length=25)
    cust_last_name: Optional[str] = Field(None, alias="CustLastName", max_length=25)
    cust_email: Optional[str] = Field(None, alias="CustEmail", max_length=50)
    cust_address: Optional[str] = Field(None, alias="CustAddress", max_length=75)
    cust_city: Optional[str] = Field(None, alias="CustCity", max_length=50)
    cust_prov: Optional[str] = Field(None, alias="CustProv", max_length=2)
    cust_postal: Optional[str] = Field(None, alias="CustPostal", max_length=7)
    cust_country: Optional[str] = Field(None, alias="CustCountry", max_length=25)
    cust_home_phone: Optional[str] = Field(None, alias="CustHomePhone", max_length=20)
    cust_bus_phone: Optional[str] = Field(None, alias="CustBusPhone", max_length=20)

    @field_validator(
        "cust_first_name", "cust_last_name", "cust_email", "cust_address", "cust_city",
        "cust_prov", "cust_postal", "cust_country", "cust_home_phone", "cust_bus_phone",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Strip text fields; empty strings count as absent."""
        return normalize_text(v)

    def missing_contact_fields(self) -> list[str]:
        """Return the wire names of required identity fields that are absent."""
        required = {
            "CustFirstName": self.cust_first_name,
            "CustLastName": self.cust_last_name,
            "CustEmail": self.cust_email,
        }
        return [name for name, value in required.items() if not value]


class OkResponse(WireModel):
    """Plain success envelope."""

    ok: bool = True
    message: Optional[str] = None


def normalize_text(v: Any) -> Any:
    """Strip strings to None when blank and stringify plain numbers."""
    if v is None:
        return None
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        v = str(v)
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v
