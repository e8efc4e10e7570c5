"""create invoices

Revision ID: 4c2e8a1f7d3b
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c2e8a1f7d3b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONEY = sa.Numeric(10, 2, asdecimal=False)


def upgrade() -> None:
    op.create_table(
        "invoices",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("invoice_number", sa.Integer(), nullable=False),
        sa.Column("invoice_date", sa.Date(), nullable=False),
        sa.Column("journey_date", sa.Date(), nullable=False),
        sa.Column("return_date", sa.Date(), nullable=True),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_phone", sa.String(length=15), nullable=False),
        sa.Column("driver_name", sa.String(), nullable=True),
        sa.Column("driver_phone", sa.String(length=15), nullable=True),
        sa.Column("pickup_location", sa.String(), nullable=False),
        sa.Column("pickup_city", sa.String(), nullable=True),
        sa.Column("destination", sa.String(), nullable=False),
        sa.Column("drop_city", sa.String(), nullable=True),
        sa.Column("stops", sa.JSON(), nullable=False),
        sa.Column("trip_type", sa.String(length=20), nullable=True),
        sa.Column("journey_type", sa.String(length=20), nullable=True),
        sa.Column("cab_type", sa.String(length=30), nullable=True),
        sa.Column("vehicle_model", sa.String(), nullable=True),
        sa.Column("cab_number", sa.String(length=20), nullable=True),
        sa.Column("starting_km", MONEY, nullable=True),
        sa.Column("closing_km", MONEY, nullable=True),
        sa.Column("total_km", MONEY, nullable=True),
        sa.Column("total_hours", MONEY, nullable=True),
        sa.Column("fare_amount", MONEY, nullable=False),
        sa.Column("toll_amount", MONEY, nullable=True),
        sa.Column("driver_allowance", MONEY, nullable=True),
        sa.Column("additional_charges", sa.JSON(), nullable=False),
        sa.Column("total_amount", MONEY, nullable=False),
        sa.Column("payment_mode", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_index("ix_invoices_invoice_number", "invoices", ["invoice_number"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_invoices_invoice_number", table_name="invoices")
    op.drop_table("invoices")
