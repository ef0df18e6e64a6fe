"""Catalog router for package and agency listings."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.catalog import AgencyListResponse, PackageListResponse
from ..services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["catalog"])

DB_DEPENDENCY = Depends(get_db)


@router.get("/packages", response_model=PackageListResponse)
async def list_packages(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """
    List packages that have not ended.

    Each package carries `Started`, true when its start date has passed.
    """
    packages = await CatalogService(db).list_packages()

    return JSONResponse(
        status_code=200,
        content=PackageListResponse(data=packages).to_wire()
    )


@router.get("/agencies", response_model=AgencyListResponse)
async def list_agencies(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """List agencies with their agents nested under `Agents`."""
    agencies = await CatalogService(db).list_agencies_with_agents()

    logger.debug("Agencies listed", extra={"count": len(agencies)})

    return JSONResponse(
        status_code=200,
        content=AgencyListResponse(data=agencies).to_wire()
    )
