"""Customer router for registration."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.common import OkResponse
from ..schemas.customer import RegisterCustomerRequest
from ..services.customer_service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["customer"])


@router.post("/register", response_model=OkResponse)
async def register_customer(
    request: RegisterCustomerRequest,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Register a new customer from the registration form."""
    customer = await CustomerService(db).register_customer(request)

    logger.info("New customer added", extra={"customer_id": customer.customer_id})

    return JSONResponse(
        status_code=200,
        content=OkResponse(message="Registration successful!").to_wire()
    )
