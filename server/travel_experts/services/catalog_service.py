"""Catalog service for package and agency listings."""

import logging
from collections.abc import Iterable
from datetime import datetime, time
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import StoreError
from ..models.agency import Agency, Agent
from ..models.package import Package
from ..schemas.catalog import AgencyWithAgents, AgentContact, PackageSummary

logger = logging.getLogger(__name__)


def _agency_entry(agency: Agency) -> AgencyWithAgents:
    return AgencyWithAgents(
        agency_id=agency.agency_id,
        agncy_address=agency.agncy_address,
        agncy_city=agency.agncy_city,
        agncy_prov=agency.agncy_prov,
        agncy_postal=agency.agncy_postal,
        agncy_country=agency.agncy_country,
        agncy_phone=agency.agncy_phone,
        agncy_fax=agency.agncy_fax,
        agents=[],
    )


def _agent_entry(agent: Agent) -> AgentContact:
    return AgentContact(
        agent_id=agent.agent_id,
        agt_first_name=agent.agt_first_name,
        agt_last_name=agent.agt_last_name,
        agt_bus_phone=agent.agt_bus_phone,
        agt_email=agent.agt_email,
    )


def group_agents_by_agency(rows: Iterable[tuple[Agency, Optional[Agent]]]) -> list[AgencyWithAgents]:
    """
    Fold outer-joined (agency, agent) rows into one entry per agency.

    Rows must arrive ordered by agency then agent. Agencies are emitted in
    first-seen order and agents keep their row order. A row whose agent is
    None contributes the agency with no agent, so agencies without staff
    still appear with an empty list.

    Args:
        rows: (agency, agent-or-None) pairs from the joined query

    Returns:
        Agencies with their nested agents
    """
    by_agency: dict[int, AgencyWithAgents] = {}

    for agency, agent in rows:
        entry = by_agency.get(agency.agency_id)
        if entry is None:
            entry = by_agency[agency.agency_id] = _agency_entry(agency)
        if agent is not None:
            entry.agents.append(_agent_entry(agent))

    return list(by_agency.values())


def package_summary(package: Package, now: datetime) -> PackageSummary:
    """Build the listing entry for a package, computing `Started` against `now`."""
    started = package.pkg_start_date is not None and package.pkg_start_date < now
    commission = package.pkg_agency_commission

    return PackageSummary(
        package_id=package.package_id,
        pkg_name=package.pkg_name,
        pkg_start_date=package.pkg_start_date,
        pkg_end_date=package.pkg_end_date,
        pkg_desc=package.pkg_desc,
        pkg_base_price=float(package.pkg_base_price),
        pkg_agency_commission=float(commission) if commission is not None else None,
        started=started,
    )


class CatalogService:
    """Service for read-only catalog queries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_packages(self, now: Optional[datetime] = None) -> list[PackageSummary]:
        """
        List packages that have not ended yet.

        A package is listed while its end date is on or after the current day.
        Results are ordered by start date, with the package id as a tie-break
        so repeated listings keep the same order.

        Args:
            now: Reference time, defaults to the current local time

        Returns:
            Package listing entries

        Raises:
            StoreError: If the store query fails
        """
        now = now or datetime.now()
        today = datetime.combine(now.date(), time.min)

        stmt = (
            select(Package)
            .where(Package.pkg_end_date >= today)
            .order_by(Package.pkg_start_date, Package.package_id)
        )

        try:
            result = await self.db.execute(stmt)
            packages = list(result.scalars())
        except SQLAlchemyError as e:
            error = StoreError(
                code="DB_ERROR_PACKAGES",
                message="Could not fetch packages",
                operation="list_packages",
            )
            logger.error(
                "Package listing failed",
                extra={
                    "operation": error.operation,
                    "error_id": error.error_id,
                    "error_type": type(e).__name__
                }
            )
            raise error from e

        logger.debug(
            "Packages listed",
            extra={"count": len(packages), "as_of": now.isoformat()}
        )

        return [package_summary(package, now) for package in packages]

    async def list_agencies_with_agents(self) -> list[AgencyWithAgents]:
        """
        List every agency with its agents.

        Uses an outer join so agencies with no agents are still listed.

        Returns:
            Agencies with nested agent lists, ordered by agency id

        Raises:
            StoreError: If the store query fails
        """
        stmt = (
            select(Agency, Agent)
            .outerjoin(Agent, Agent.agency_id == Agency.agency_id)
            .order_by(Agency.agency_id, Agent.agt_last_name, Agent.agent_id)
        )

        try:
            result = await self.db.execute(stmt)
            rows = [(agency, agent) for agency, agent in result.all()]
        except SQLAlchemyError as e:
            error = StoreError(
                code="DB_ERROR_AGENCIES",
                message="Could not fetch agencies",
                operation="list_agencies_with_agents",
            )
            logger.error(
                "Agency listing failed",
                extra={
                    "operation": error.operation,
                    "error_id": error.error_id,
                    "error_type": type(e).__name__
                }
            )
            raise error from e

        return group_agents_by_agency(rows)
