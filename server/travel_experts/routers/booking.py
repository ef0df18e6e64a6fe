"""Booking router for placing orders."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.booking import BookingResponse, CreateBookingRequest
from ..services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["booking"])

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)


@router.post("/bookings", response_model=BookingResponse)
async def create_booking(
    request: CreateBookingRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Place a booking for a package.

    Creates the customer and the booking in one transaction and echoes the
    generated booking number back for display.
    """
    confirmation = await BookingService(db).create_booking(request)

    logger.info(
        "Order placed",
        extra={
            "booking_id": confirmation.booking_id,
            "booking_no": confirmation.booking_no,
            "package_id": confirmation.package_id
        }
    )

    return JSONResponse(
        status_code=200,
        content=BookingResponse(booking=confirmation).to_wire()
    )


# The order form of the second site revision posts here
router.add_api_route(
    "/orders",
    create_booking,
    methods=["POST"],
    response_model=BookingResponse,
    summary="Create Booking (order form alias)",
)
