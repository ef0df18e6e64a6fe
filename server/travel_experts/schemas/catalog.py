"""Catalog schemas for packages and agency listings."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import WireModel


class PackageSummary(WireModel):
    """Package listing entry with its computed `Started` flag."""

    package_id: int = Field(..., alias="PackageId")
    pkg_name: str = Field(..., alias="PkgName")
    pkg_start_date: Optional[datetime] = Field(None, alias="PkgStartDate")
    pkg_end_date: Optional[datetime] = Field(None, alias="PkgEndDate")
    pkg_desc: Optional[str] = Field(None, alias="PkgDesc")
    pkg_base_price: float = Field(..., alias="PkgBasePrice")
    pkg_agency_commission: Optional[float] = Field(None, alias="PkgAgencyCommission")
    started: bool = Field(..., alias="Started", description="Start date already passed at query time")


class AgentContact(WireModel):
    """Agent sub-record nested under an agency."""

    agent_id: int = Field(..., alias="AgentId")
    agt_first_name: Optional[str] = Field(None, alias="AgtFirstName")
    agt_last_name: Optional[str] = Field(None, alias="AgtLastName")
    agt_bus_phone: Optional[str] = Field(None, alias="AgtBusPhone")
    agt_email: Optional[str] = Field(None, alias="AgtEmail")


class AgencyWithAgents(WireModel):
    """Agency with its agents, possibly none."""

    agency_id: int = Field(..., alias="AgencyId")
    agncy_address: Optional[str] = Field(None, alias="AgncyAddress")
    agncy_city: Optional[str] = Field(None, alias="AgncyCity")
    agncy_prov: Optional[str] = Field(None, alias="AgncyProv")
    agncy_postal: Optional[str] = Field(None, alias="AgncyPostal")
    agncy_country: Optional[str] = Field(None, alias="AgncyCountry")
    agncy_phone: Optional[str] = Field(None, alias="AgncyPhone")
    agncy_fax: Optional[str] = Field(None, alias="AgncyFax")
    agents: list[AgentContact] = Field(default_factory=list, alias="Agents")


class PackageListResponse(WireModel):
    """Envelope for the package listing."""

    ok: bool = True
    data: list[PackageSummary]


class AgencyListResponse(WireModel):
    """Envelope for the agency listing."""

    ok: bool = True
    data: list[AgencyWithAgents]
