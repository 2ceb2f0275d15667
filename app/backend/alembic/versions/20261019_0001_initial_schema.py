"""initial roster schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
    )

    op.create_table(
        "districts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("company_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_districts_company_id", "districts", ["company_id"])

    op.create_table(
        "employees",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("company_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column(
            "main_district_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("districts.id"),
            nullable=True,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_index("ix_employees_company_id", "employees", ["company_id"])
    op.create_index("ix_employees_main_district_id", "employees", ["main_district_id"])

    op.create_table(
        "stores",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("company_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("district_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("districts.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("opened_at", sa.Date(), nullable=True),
        sa.Column("closed_at", sa.Date(), nullable=True),
    )
    op.create_index("ix_stores_company_id", "stores", ["company_id"])
    op.create_index("ix_stores_district_id", "stores", ["district_id"])

    op.create_table(
        "shift_types",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("company_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("color_key", sa.String(length=32), nullable=True),
        sa.UniqueConstraint("company_id", "code", name="uq_shift_types_company_code"),
    )

    op.create_table(
        "assignments",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("company_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("employee_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
        sa.Column("store_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("stores.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column(
            "shift_type_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("shift_types.id"),
            nullable=True,
        ),
        sa.Column("is_substitution", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.UniqueConstraint("employee_id", "date", name="uq_assignments_employee_date"),
        sa.UniqueConstraint("store_id", "date", name="uq_assignments_store_date"),
    )
    op.create_index("ix_assignments_date", "assignments", ["date"])
    op.create_index("ix_assignments_company_id", "assignments", ["company_id"])


def downgrade() -> None:
    op.drop_index("ix_assignments_company_id", table_name="assignments")
    op.drop_index("ix_assignments_date", table_name="assignments")
    op.drop_table("assignments")

    op.drop_table("shift_types")

    op.drop_index("ix_stores_district_id", table_name="stores")
    op.drop_index("ix_stores_company_id", table_name="stores")
    op.drop_table("stores")

    op.drop_index("ix_employees_main_district_id", table_name="employees")
    op.drop_index("ix_employees_company_id", table_name="employees")
    op.drop_table("employees")

    op.drop_index("ix_districts_company_id", table_name="districts")
    op.drop_table("districts")

    op.drop_table("companies")
