"""add master data tables

Revision ID: 3b9e1c7a52d4
Revises:
Create Date: 2026-09-28 10:14:22.417903

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b9e1c7a52d4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LABOR_RATE_COLUMNS = (
    "foreman",
    "leadman",
    "equipment_operator_heavy",
    "equipment_operator_high_skilled",
    "equipment_operator_light_skilled",
    "driver",
    "labor_skilled",
    "labor_semi_skilled",
    "labor_unskilled",
)


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "labor_rates",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("district", sa.String(), nullable=False, server_default="Bukidnon 1st"),
        *[sa.Column(col, sa.Float(), nullable=False, server_default="0") for col in LABOR_RATE_COLUMNS],
        sa.Column("effective_date", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        *_timestamps(),
        *[
            sa.CheckConstraint(f"{col} >= 0", name=f"ck_labor_rates_{col}_nonnegative")
            for col in LABOR_RATE_COLUMNS
        ],
    )
    op.create_index("ix_labor_rates_id", "labor_rates", ["id"], unique=False)
    op.create_index("ix_labor_rates_location", "labor_rates", ["location"], unique=True)
    op.create_index("ix_labor_rates_district", "labor_rates", ["district"], unique=False)

    op.create_table(
        "equipment",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("no", sa.Integer(), nullable=False),
        sa.Column("complete_description", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("equipment_model", sa.String(), nullable=False, server_default=""),
        sa.Column("capacity", sa.String(), nullable=False, server_default=""),
        sa.Column("flywheel_horsepower", sa.Float(), nullable=False, server_default="0"),
        sa.Column("rental_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column("hourly_rate", sa.Float(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint("hourly_rate >= 0", name="ck_equipment_hourly_rate_nonnegative"),
        sa.CheckConstraint("rental_rate >= 0", name="ck_equipment_rental_rate_nonnegative"),
    )
    op.create_index("ix_equipment_id", "equipment", ["id"], unique=False)
    op.create_index("ix_equipment_no", "equipment", ["no"], unique=True)
    op.create_index("ix_equipment_description", "equipment", ["description"], unique=False)

    op.create_table(
        "materials",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("material_code", sa.String(), nullable=False),
        sa.Column("material_description", sa.String(), nullable=False),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("base_price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("include_hauling", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint("base_price >= 0", name="ck_materials_base_price_nonnegative"),
    )
    op.create_index("ix_materials_id", "materials", ["id"], unique=False)
    op.create_index("ix_materials_material_code", "materials", ["material_code"], unique=True)
    op.create_index("ix_materials_category", "materials", ["category"], unique=False)
    op.create_index("ix_materials_is_active", "materials", ["is_active"], unique=False)

    op.create_table(
        "material_prices",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("material_code", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("unit_cost", sa.Float(), nullable=False, server_default="0"),
        sa.Column("brand", sa.String(), nullable=False, server_default=""),
        sa.Column("specification", sa.String(), nullable=False, server_default=""),
        sa.Column("supplier", sa.String(), nullable=False, server_default=""),
        sa.Column("effective_date", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        *_timestamps(),
        sa.UniqueConstraint(
            "material_code",
            "location",
            "effective_date",
            name="uq_material_prices_code_location_effective",
        ),
        sa.CheckConstraint("unit_cost >= 0", name="ck_material_prices_unit_cost_nonnegative"),
    )
    op.create_index("ix_material_prices_id", "material_prices", ["id"], unique=False)
    op.create_index("ix_material_prices_location", "material_prices", ["location"], unique=False)
    op.create_index(
        "ix_material_prices_lookup",
        "material_prices",
        ["material_code", "location", "effective_date"],
        unique=False,
    )

    op.create_table(
        "pay_items",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("division", sa.String(), nullable=False),
        sa.Column("part", sa.String(), nullable=False),
        sa.Column("item", sa.String(), nullable=False),
        sa.Column("pay_item_number", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_pay_items_id", "pay_items", ["id"], unique=False)
    op.create_index("ix_pay_items_division", "pay_items", ["division"], unique=False)
    op.create_index("ix_pay_items_part", "pay_items", ["part"], unique=False)
    op.create_index("ix_pay_items_item", "pay_items", ["item"], unique=False)
    op.create_index("ix_pay_items_pay_item_number", "pay_items", ["pay_item_number"], unique=True)
    op.create_index("ix_pay_items_is_active", "pay_items", ["is_active"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("pay_items")
    op.drop_table("material_prices")
    op.drop_table("materials")
    op.drop_table("equipment")
    op.drop_table("labor_rates")
