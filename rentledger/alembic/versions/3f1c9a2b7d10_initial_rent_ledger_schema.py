"""initial rent ledger schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-17 09:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


LEASE_STATUS = sa.Enum(
    "Active", "ExpiringSoon", "Terminated", name="lease_status", native_enum=False
)
PAYMENT_STATUS = sa.Enum(
    "success", "pending", "failed", name="payment_status", native_enum=False
)
MAINTENANCE_PRIORITY = sa.Enum(
    "High", "Medium", "Low", name="maintenance_priority", native_enum=False
)
MAINTENANCE_STATUS = sa.Enum(
    "Pending", "InProgress", "Resolved", name="maintenance_status", native_enum=False
)


def upgrade():
    op.create_table(
        "landlords",
        sa.Column("id", sa.String(length=255), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "properties",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "landlord_id",
            sa.String(length=255),
            sa.ForeignKey("landlords.id"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("state", sa.String(length=120), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_properties_landlord_id", "properties", ["landlord_id"])

    op.create_table(
        "units",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "property_id",
            sa.String(length=32),
            sa.ForeignKey("properties.id"),
            nullable=False,
        ),
        sa.Column("unit_number", sa.String(length=50), nullable=False),
        sa.Column("rent_amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("tenant_name", sa.String(length=255), nullable=True),
        sa.Column("tenant_email", sa.String(length=255), nullable=True),
        sa.Column("tenant_phone", sa.String(length=50), nullable=True),
        sa.Column("customer_code", sa.String(length=100), nullable=True, unique=True),
        sa.Column("virtual_account_number", sa.String(length=30), nullable=True),
        sa.Column("virtual_account_bank", sa.String(length=120), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_units_property_id", "units", ["property_id"])

    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "landlord_id",
            sa.String(length=255),
            sa.ForeignKey("landlords.id"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone_number", sa.String(length=50), nullable=True),
        sa.Column("national_id", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_tenants_landlord_id", "tenants", ["landlord_id"])

    op.create_table(
        "leases",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "tenant_id", sa.String(length=32), sa.ForeignKey("tenants.id"), nullable=False
        ),
        sa.Column(
            "unit_id", sa.String(length=32), sa.ForeignKey("units.id"), nullable=False
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("monthly_rent", sa.Numeric(14, 2), nullable=False),
        sa.Column("security_deposit", sa.Numeric(14, 2), nullable=False),
        sa.Column("status", LEASE_STATUS, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_leases_tenant_id", "leases", ["tenant_id"])
    op.create_index("ix_leases_unit_id", "leases", ["unit_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "unit_id", sa.String(length=32), sa.ForeignKey("units.id"), nullable=False
        ),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("reference", sa.String(length=255), nullable=False, unique=True),
        sa.Column("status", PAYMENT_STATUS, nullable=False),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_payments_unit_id", "payments", ["unit_id"])
    op.create_index("ix_payments_unit_paid_at", "payments", ["unit_id", "paid_at"])

    op.create_table(
        "maintenance_requests",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "property_id",
            sa.String(length=32),
            sa.ForeignKey("properties.id"),
            nullable=False,
        ),
        sa.Column(
            "unit_id", sa.String(length=32), sa.ForeignKey("units.id"), nullable=True
        ),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("priority", MAINTENANCE_PRIORITY, nullable=False),
        sa.Column("status", MAINTENANCE_STATUS, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_maintenance_requests_property_id", "maintenance_requests", ["property_id"]
    )


def downgrade():
    op.drop_index("ix_maintenance_requests_property_id", table_name="maintenance_requests")
    op.drop_table("maintenance_requests")
    op.drop_index("ix_payments_unit_paid_at", table_name="payments")
    op.drop_index("ix_payments_unit_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_leases_unit_id", table_name="leases")
    op.drop_index("ix_leases_tenant_id", table_name="leases")
    op.drop_table("leases")
    op.drop_index("ix_tenants_landlord_id", table_name="tenants")
    op.drop_table("tenants")
    op.drop_index("ix_units_property_id", table_name="units")
    op.drop_table("units")
    op.drop_index("ix_properties_landlord_id", table_name="properties")
    op.drop_table("properties")
    op.drop_table("landlords")
