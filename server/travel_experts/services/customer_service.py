"""Customer service for registration."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ClientError, StoreError
from ..core.observability import metrics_collector
from ..models.customer import Customer
from ..schemas.customer import RegisterCustomerRequest

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register_customer(self, request: RegisterCustomerRequest) -> Customer:
        """
        Register a new customer.

        Args:
            request: Registration request

        Returns:
            Created customer entity

        Raises:
            ClientError: If first name, last name or email is missing
            StoreError: If the insert fails
        """
        missing = request.missing_contact_fields()
        if missing:
            logger.warning(
                "Registration rejected - missing required fields",
                extra={"missing_fields": missing}
            )
            raise ClientError(message="Missing required fields", fields=missing)

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

        try:
            self.db.add(customer)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            error = StoreError(
                code="DB_ERROR_REGISTER",
                message="Database insert failed",
                operation="register_customer",
            )
            logger.error(
                "Customer registration failed",
                extra={
                    "operation": error.operation,
                    "error_id": error.error_id,
                    "error_type": type(e).__name__
                }
            )
            raise error from e

        metrics_collector.record_customer_registered()

        logger.info(
            "Customer registered successfully",
            extra={"customer_id": customer.customer_id}
        )

        return customer
