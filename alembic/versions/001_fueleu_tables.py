"""FuelEU ledger tables.

Revision ID: 001_fueleu
Revises:
Create Date: 2026-10-18

Adds ship_compliance, bank_entries, pools, pool_members and routes.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "001_fueleu"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "ship_compliance",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("ship_id", sa.String(100), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("cb_gco2eq", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("ship_id", "year", name="uq_ship_compliance_ship_year"),
    )
    op.create_index("ix_ship_compliance_ship_id", "ship_compliance", ["ship_id"])

    op.create_table(
        "bank_entries",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("ship_id", sa.String(100), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("amount_gco2eq", sa.Float(), nullable=False),
        sa.Column("is_applied", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_bank_entries_created_at", "bank_entries", ["created_at"])
    op.create_index("ix_bank_entries_ship_year", "bank_entries", ["ship_id", "year"])
    op.create_index("ix_bank_entries_ship_applied", "bank_entries", ["ship_id", "is_applied"])

    op.create_table(
        "pools",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_pools_year", "pools", ["year"])

    op.create_table(
        "pool_members",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "pool_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("pools.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("ship_id", sa.String(100), nullable=False),
        sa.Column("cb_before", sa.Float(), nullable=False),
        sa.Column("cb_after", sa.Float(), nullable=False),
    )
    op.create_index("ix_pool_members_pool_id", "pool_members", ["pool_id"])

    op.create_table(
        "routes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("route_id", sa.String(50), nullable=False),
        sa.Column("vessel_type", sa.String(100), nullable=False),
        sa.Column("fuel_type", sa.String(50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("ghg_intensity", sa.Float(), nullable=False),
        sa.Column("fuel_consumption", sa.Float(), nullable=False),
        sa.Column("distance", sa.Float(), nullable=False),
        sa.Column("total_emissions", sa.Float(), nullable=False),
        sa.Column("is_baseline", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_routes_route_id", "routes", ["route_id"], unique=True)
    op.create_index("ix_routes_is_baseline", "routes", ["is_baseline"])
    op.create_index("ix_routes_created_at", "routes", ["created_at"])
    op.create_index("ix_routes_filters", "routes", ["vessel_type", "fuel_type", "year"])


def downgrade() -> None:
    op.drop_table("routes")
    op.drop_table("pool_members")
    op.drop_table("pools")
    op.drop_table("bank_entries")
    op.drop_table("ship_compliance")
