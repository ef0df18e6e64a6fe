#!/usr/bin/env python3
"""Setup script for the Travel Experts API."""

import asyncio
import logging
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from alembic import command
from alembic.config import Config
from sqlalchemy import func, select

from travel_experts.core.database import build_engine, build_session_factory, close_db
from travel_experts.models import Agency, Agent, Package, TripType

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def setup_database():
    """Setup the database with initial schema."""
    logger.info("Setting up database...")

    try:
        alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
        alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))

        logger.info("Running database migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed")

    except Exception as e:
        logger.error(f"Database setup failed: {e}")
        raise


async def create_sample_data():
    """Create sample trip types, packages, agencies and agents."""
    logger.info("Creating sample data...")

    engine = build_engine()
    session_factory = build_session_factory(engine)

    try:
        async with session_factory() as db:
            try:
                existing = await db.scalar(select(func.count()).select_from(Package))
                if existing:
                    logger.info("Sample data already exists, skipping...")
                    return

                db.add_all([
                    TripType(trip_type_id="B", tt_name="Business"),
                    TripType(trip_type_id="G", tt_name="Group"),
                    TripType(trip_type_id="L", tt_name="Leisure"),
                ])

                today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
                db.add_all([
                    Package(
                        pkg_name="Caribbean New Year",
                        pkg_start_date=today - timedelta(days=14),
                        pkg_end_date=today + timedelta(days=180),
                        pkg_desc="Cruise the Caribbean & Celebrate the New Year.",
                        pkg_base_price=Decimal("4800.00"),
                        pkg_agency_commission=Decimal("400.00"),
                    ),
                    Package(
                        pkg_name="Polynesian Paradise",
                        pkg_start_date=today + timedelta(days=30),
                        pkg_end_date=today + timedelta(days=44),
                        pkg_desc="8 Day All Inclusive Hawaiian Vacation",
                        pkg_base_price=Decimal("3000.00"),
                        pkg_agency_commission=Decimal("310.00"),
                    ),
                    Package(
                        pkg_name="Asian Expedition",
                        pkg_start_date=today + timedelta(days=60),
                        pkg_end_date=today + timedelta(days=81),
                        pkg_desc="Airfare, Hotel and Eco Tour.",
                        pkg_base_price=Decimal("2800.00"),
                        pkg_agency_commission=Decimal("300.00"),
                    ),
                    Package(
                        pkg_name="European Vacation",
                        pkg_start_date=today + timedelta(days=90),
                        pkg_end_date=today + timedelta(days=104),
                        pkg_desc="Euro Tour with Rail Pass and Travel Insurance",
                        pkg_base_price=Decimal("3000.00"),
                        pkg_agency_commission=Decimal("280.00"),
                    ),
                ])

                calgary = Agency(
                    agncy_address="1155 8th Ave SW", agncy_city="Calgary", agncy_prov="AB",
                    agncy_postal="T2P1N3", agncy_country="Canada", agncy_phone="4032719873",
                    agncy_fax="4032719872",
                )
                okotoks = Agency(
                    agncy_address="110 Main Street", agncy_city="Okotoks", agncy_prov="AB",
                    agncy_postal="T7R3J5", agncy_country="Canada", agncy_phone="4035632381",
                    agncy_fax="4035632382",
                )
                db.add_all([calgary, okotoks])
                await db.flush()  # Get the agency IDs

                db.add_all([
                    Agent(agt_first_name="Janet", agt_last_name="Delton", agt_bus_phone="4032649874",
                          agt_email="janet.delton@travelexperts.com", agt_position="Senior Agent",
                          agency_id=calgary.agency_id),
                    Agent(agt_first_name="Judy", agt_last_name="Lisle", agt_bus_phone="4032108756",
                          agt_email="judy.lisle@travelexperts.com", agt_position="Intermediate Agent",
                          agency_id=calgary.agency_id),
                    Agent(agt_first_name="John", agt_last_name="Coville", agt_bus_phone="4032092399",
                          agt_email="john.coville@travelexperts.com", agt_position="Intermediate Agent",
                          agency_id=calgary.agency_id),
                    Agent(agt_first_name="Bruce", agt_last_name="Dahl", agt_bus_phone="4032102257",
                          agt_email="bruce.dahl@travelexperts.com", agt_position="Senior Agent",
                          agency_id=okotoks.agency_id),
                ])

                await db.commit()
                logger.info("Sample data created successfully!")

            except Exception as e:
                await db.rollback()
                logger.error(f"Failed to create sample data: {e}")
                raise
    finally:
        await close_db(engine)


def main():
    """Main setup function."""
    logger.info("Starting Travel Experts API setup...")

    # Migrations drive their own event loop
    setup_database()

    asyncio.run(create_sample_data())

    logger.info("Setup completed successfully!")
    logger.info("You can now start the API server with: cd server && uvicorn travel_experts.main:app --reload")


if __name__ == "__main__":
    main()
