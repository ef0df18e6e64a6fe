"""Initial database schema

Revision ID: 0001
Revises:
Create Date: 2025-10-22 12:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    # Create packages table
    op.create_table('packages',
        sa.Column('PackageId', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('PkgName', sa.String(length=50), nullable=False),
        sa.Column('PkgStartDate', sa.DateTime(), nullable=True),
        sa.Column('PkgEndDate', sa.DateTime(), nullable=True),
        sa.Column('PkgDesc', sa.String(length=50), nullable=True),
        sa.Column('PkgBasePrice', sa.Numeric(precision=19, scale=4), nullable=False),
        sa.Column('PkgAgencyCommission', sa.Numeric(precision=19, scale=4), nullable=True),
        sa.PrimaryKeyConstraint('PackageId')
    )
    op.create_index(op.f('ix_packages_PkgName'), 'packages', ['PkgName'], unique=False)
    op.create_index(op.f('ix_packages_PkgStartDate'), 'packages', ['PkgStartDate'], unique=False)
    op.create_index(op.f('ix_packages_PkgEndDate'), 'packages', ['PkgEndDate'], unique=False)

    # Create agencies table
    op.create_table('agencies',
        sa.Column('AgencyId', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('AgncyAddress', sa.String(length=50), nullable=True),
        sa.Column('AgncyCity', sa.String(length=50), nullable=True),
        sa.Column('AgncyProv', sa.String(length=50), nullable=True),
        sa.Column('AgncyPostal', sa.String(length=50), nullable=True),
        sa.Column('AgncyCountry', sa.String(length=50), nullable=True),
        sa.Column('AgncyPhone', sa.String(length=50), nullable=True),
        sa.Column('AgncyFax', sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint('AgencyId')
    )

    # Create agents table
    op.create_table('agents',
        sa.Column('AgentId', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('AgtFirstName', sa.String(length=20), nullable=True),
        sa.Column('AgtMiddleInitial', sa.String(length=5), nullable=True),
        sa.Column('AgtLastName', sa.String(length=20), nullable=True),
        sa.Column('AgtBusPhone', sa.String(length=20), nullable=True),
        sa.Column('AgtEmail', sa.String(length=50), nullable=True),
        sa.Column('AgtPosition', sa.String(length=20), nullable=True),
        sa.Column('AgencyId', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['AgencyId'], ['agencies.AgencyId']),
        sa.PrimaryKeyConstraint('AgentId')
    )
    op.create_index(op.f('ix_agents_AgencyId'), 'agents', ['AgencyId'], unique=False)

    # Create customers table
    op.create_table('customers',
        sa.Column('CustomerId', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('CustFirstName', sa.String(length=25), nullable=False),
        sa.Column('CustLastName', sa.String(length=25), nullable=False),
        sa.Column('CustEmail', sa.String(length=50), nullable=False),
        sa.Column('CustAddress', sa.String(length=75), nullable=True),
        sa.Column('CustCity', sa.String(length=50), nullable=True),
        sa.Column('CustProv', sa.String(length=2), nullable=True),
        sa.Column('CustPostal', sa.String(length=7), nullable=True),
        sa.Column('CustCountry', sa.String(length=25), nullable=True),
        sa.Column('CustHomePhone', sa.String(length=20), nullable=True),
        sa.Column('CustBusPhone', sa.String(length=20), nullable=True),
        sa.Column('AgentId', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['AgentId'], ['agents.AgentId']),
        sa.PrimaryKeyConstraint('CustomerId')
    )
    op.create_index(op.f('ix_customers_CustEmail'), 'customers', ['CustEmail'], unique=False)

    # Create triptypes table
    op.create_table('triptypes',
        sa.Column('TripTypeId', sa.String(length=1), nullable=False),
        sa.Column('TTName', sa.String(length=25), nullable=True),
        sa.PrimaryKeyConstraint('TripTypeId')
    )

    # Create bookings table
    op.create_table('bookings',
        sa.Column('BookingId', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('BookingDate', sa.DateTime(), nullable=False),
        sa.Column('BookingNo', sa.String(length=50), nullable=False),
        sa.Column('TravelerCount', sa.Integer(), nullable=False),
        sa.Column('CustomerId', sa.Integer(), nullable=False),
        sa.Column('TripTypeId', sa.String(length=1), nullable=False),
        sa.Column('PackageId', sa.Integer(), nullable=False),
        sa.CheckConstraint('"TravelerCount" > 0', name='ck_booking_traveler_count_positive'),
        sa.CheckConstraint('length("BookingNo") > 0', name='ck_booking_no_not_empty'),
        sa.ForeignKeyConstraint(['CustomerId'], ['customers.CustomerId']),
        sa.ForeignKeyConstraint(['PackageId'], ['packages.PackageId']),
        sa.ForeignKeyConstraint(['TripTypeId'], ['triptypes.TripTypeId']),
        sa.PrimaryKeyConstraint('BookingId')
    )
    op.create_index(op.f('ix_bookings_BookingNo'), 'bookings', ['BookingNo'], unique=True)
    op.create_index(op.f('ix_bookings_CustomerId'), 'bookings', ['CustomerId'], unique=False)
    op.create_index(op.f('ix_bookings_PackageId'), 'bookings', ['PackageId'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table('bookings')
    op.drop_table('triptypes')
    op.drop_table('customers')
    op.drop_table('agents')
    op.drop_table('agencies')
    op.drop_table('packages')
