"""Booking service for placing customer bookings against packages."""

import logging
import secrets
import string
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import ClientError, ConflictError, NotFoundError, StoreError
from ..core.observability import metrics_collector
from ..models.booking import Booking
from ..models.customer import Customer
from ..models.package import Package
from ..models.trip_type import TripType
from ..schemas.booking import BookingConfirmation, CreateBookingRequest

logger = logging.getLogger(__name__)

BOOKING_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


class BookingNumberExhaustedError(ConflictError):
    """Exception when every generated booking number collided."""

    def __init__(self, attempts: int):
        super().__init__(
            message=f"No unique booking number after {attempts} attempts",
            code="BOOKING_NUMBER_EXHAUSTED",
            attempts=attempts,
        )


class BookingService:
    """
    Service that places bookings.

    A booking writes the customer row, the booking row and, when the lookup
    table is empty, the default trip type in one transaction on the session
    handed to the constructor. Nothing is visible to other sessions until the
    final commit, and any failure rolls the whole request back.
    """

    def __init__(
        self,
        db: AsyncSession,
        number_length: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ):
        self.db = db
        self.number_length = number_length or settings.booking_number_length
        self.max_attempts = max_attempts or settings.booking_number_max_attempts

    def _generate_booking_number(self) -> str:
        """Generate a random uppercase alphanumeric booking number."""
        return ''.join(secrets.choice(BOOKING_NUMBER_ALPHABET) for _ in range(self.number_length))

    async def create_booking(self, request: CreateBookingRequest) -> BookingConfirmation:
        """
        Create a customer and a booking for one order.

        Args:
            request: Booking request with contact fields and package reference

        Returns:
            Confirmation echoing the booking number, package and customer

        Raises:
            ClientError: If a required field is missing
            NotFoundError: If the package reference does not resolve
            StoreError: If the store fails or booking numbers keep colliding
        """
        missing = request.missing_fields()
        if missing:
            logger.warning(
                "Booking rejected - missing required fields",
                extra={"missing_fields": missing}
            )
            raise ClientError(message="Missing required fields", fields=missing)

        try:
            package = await self.resolve_package(request)
            trip_type_id = await self.ensure_trip_type()

            customer = Customer(
                cust_first_name=request.cust_first_name,
                cust_last_name=request.cust_last_name,
                cust_email=request.cust_email,
                cust_address=request.cust_address,
                cust_city=request.cust_city,
                cust_prov=request.cust_prov,
                cust_postal=request.cust_postal,
                cust_country=request.cust_country,
                cust_home_phone=request.cust_home_phone,
                cust_bus_phone=request.cust_bus_phone,
            )
            self.db.add(customer)
            await self.db.flush()

            booking = await self._insert_booking(
                customer_id=customer.customer_id,
                package_id=package.package_id,
                trip_type_id=trip_type_id,
                traveler_count=request.traveler_count,
            )

            await self.db.commit()

        except NotFoundError:
            await self.db.rollback()
            raise

        except BookingNumberExhaustedError as e:
            await self.db.rollback()
            metrics_collector.record_booking_failed("booking_number_exhausted")
            error = StoreError(code="DB_ERROR_ORDER", message="Order failed", operation="create_booking")
            logger.error(
                "Booking failed - booking number retries exhausted",
                extra={
                    "operation": error.operation,
                    "error_id": error.error_id,
                    "attempts": self.max_attempts
                }
            )
            raise error from e

        except SQLAlchemyError as e:
            await self.db.rollback()
            metrics_collector.record_booking_failed("store_error")
            error = StoreError(code="DB_ERROR_ORDER", message="Order failed", operation="create_booking")
            logger.error(
                "Booking failed - store error, transaction rolled back",
                extra={
                    "operation": error.operation,
                    "error_id": error.error_id,
                    "error_type": type(e).__name__
                }
            )
            raise error from e

        metrics_collector.record_booking_created(package.package_id)

        logger.info(
            "Booking created successfully",
            extra={
                "booking_id": booking.booking_id,
                "booking_no": booking.booking_no,
                "customer_id": customer.customer_id,
                "package_id": package.package_id,
                "trip_type_id": trip_type_id,
                "traveler_count": booking.traveler_count
            }
        )

        return BookingConfirmation(
            booking_no=booking.booking_no,
            pkg_name=package.pkg_name,
            booking_date=booking.booking_date,
            traveler_count=request.traveler_count,
            cust_first_name=request.cust_first_name,
            cust_last_name=request.cust_last_name,
            cust_email=request.cust_email,
            booking_id=booking.booking_id,
            customer_id=customer.customer_id,
            package_id=package.package_id,
        )

    async def resolve_package(self, request: CreateBookingRequest) -> Package:
        """
        Resolve the request's package reference to a stored package.

        Raises:
            NotFoundError: If no package matches the id or name
        """
        package_id, package_name = request.package_reference()

        if package_id is not None:
            package = await self.get_package_by_id(package_id)
        else:
            package = await self.get_package_by_name(package_name)

        if package is None:
            reference = str(package_id) if package_id is not None else package_name
            logger.warning(
                "Booking rejected - package not found",
                extra={"package_reference": reference}
            )
            raise NotFoundError(resource_type="package", resource_id=reference)

        return package

    async def get_package_by_id(self, package_id: int) -> Package | None:
        """Get package by ID."""
        stmt = select(Package).where(Package.package_id == package_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_package_by_name(self, name: str) -> Package | None:
        """Get package by exact name, lowest id first when names repeat."""
        stmt = (
            select(Package)
            .where(Package.pkg_name == name)
            .order_by(Package.package_id)
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_any_trip_type(self) -> TripType | None:
        """Get the first trip type by code, if the lookup table has any."""
        stmt = select(TripType).order_by(TripType.trip_type_id).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def ensure_trip_type(self) -> str:
        """
        Return a trip type code, seeding the default row if the table is empty.

        The seed runs in a SAVEPOINT so that losing a race against another
        request seeding the same row only undoes the seed attempt. The loser
        then reads the winner's row.

        Returns:
            Trip type code to reference from the booking
        """
        trip_type = await self.get_any_trip_type()
        if trip_type is not None:
            return trip_type.trip_type_id

        default_id = settings.default_trip_type_id
        try:
            async with self.db.begin_nested():
                self.db.add(TripType(trip_type_id=default_id, tt_name=settings.default_trip_type_name))
        except IntegrityError:
            metrics_collector.record_trip_type_seed("raced")
            logger.info(
                "Default trip type already seeded by a concurrent request",
                extra={"trip_type_id": default_id}
            )
            trip_type = await self.get_any_trip_type()
            if trip_type is None:
                raise
            return trip_type.trip_type_id

        metrics_collector.record_trip_type_seed("inserted")
        logger.info(
            "Seeded default trip type",
            extra={"trip_type_id": default_id}
        )
        return default_id

    async def _insert_booking(
        self,
        customer_id: int,
        package_id: int,
        trip_type_id: str,
        traveler_count: int,
    ) -> Booking:
        """
        Insert the booking, regenerating the booking number on collisions.

        Each attempt runs in its own SAVEPOINT so a uniqueness violation
        discards only that attempt and the customer row stays pending.

        Raises:
            BookingNumberExhaustedError: If every attempt collided
        """
        for attempt in range(1, self.max_attempts + 1):
            booking_no = self._generate_booking_number()
            booking = Booking(
                booking_date=datetime.now().replace(microsecond=0),
                booking_no=booking_no,
                traveler_count=traveler_count,
                customer_id=customer_id,
                package_id=package_id,
                trip_type_id=trip_type_id,
            )
            try:
                async with self.db.begin_nested():
                    self.db.add(booking)
            except IntegrityError:
                # Any other integrity failure would repeat on every attempt
                if not await self.booking_number_taken(booking_no):
                    raise
                metrics_collector.record_booking_number_collision()
                logger.warning(
                    "Booking number collision - regenerating",
                    extra={
                        "attempt": attempt,
                        "max_attempts": self.max_attempts
                    }
                )
                continue

            return booking

        raise BookingNumberExhaustedError(self.max_attempts)

    async def booking_number_taken(self, booking_no: str) -> bool:
        """Return True if a booking already uses this number."""
        stmt = select(Booking.booking_id).where(Booking.booking_no == booking_no)
        result = await self.db.execute(stmt)
        return result.first() is not None
