"""Create companies and pricings tables.

Revision ID: 0001
Revises: 
Create Date: 2025-12-10 12:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# Revision identifiers
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

cost_type_enum = postgresql.ENUM("absolute", "relative", name="pricing_cost_type", create_type=False)


def upgrade() -> None:
    """Create company and pricing schema."""

    # Companies table
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("country", sa.String(255), nullable=False),
        sa.Column("description", sa.String, nullable=True),
        sa.Column("address", sa.String, nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    cost_type_enum.create(op.get_bind(), checkfirst=True)

    # Pricings table, rows go away with their company
    op.create_table(
        "pricings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String, nullable=True),
        sa.Column("cost", sa.Numeric(10, 2), nullable=False),
        sa.Column("cost_type", cost_type_enum, nullable=False, server_default="absolute"),
        sa.Column("is_base_plan", sa.Boolean, nullable=False, server_default="false"),
        sa.Column(
            "company_id",
            sa.Integer,
            sa.ForeignKey("companies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_pricings_company_id", "pricings", ["company_id"])


def downgrade() -> None:
    """Drop company and pricing schema."""
    op.drop_index("ix_pricings_company_id", table_name="pricings")
    op.drop_table("pricings")
    cost_type_enum.drop(op.get_bind(), checkfirst=True)
    op.drop_table("companies")
