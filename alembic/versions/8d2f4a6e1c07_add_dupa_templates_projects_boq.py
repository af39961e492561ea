"""add dupa templates, projects and project boq

Revision ID: 8d2f4a6e1c07
Revises: 3b9e1c7a52d4
Create Date: 2026-09-30 15:42:08.903114

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d2f4a6e1c07'
down_revision: Union[str, Sequence[str], None] = '3b9e1c7a52d4'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BOQ_COST_COLUMNS = (
    "direct_cost",
    "ocm_percentage",
    "ocm_cost",
    "cp_percentage",
    "cp_cost",
    "subtotal_with_markup",
    "vat_percentage",
    "vat_cost",
    "total_cost",
    "unit_cost",
    "total_amount",
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "dupa_templates",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("pay_item_id", sa.Integer(), nullable=True),
        sa.Column("pay_item_number", sa.String(), nullable=False),
        sa.Column("pay_item_description", sa.String(), nullable=False),
        sa.Column("unit_of_measurement", sa.String(), nullable=False),
        sa.Column("output_per_hour", sa.Float(), nullable=False, server_default="1"),
        sa.Column("labor_template", sa.JSON(), nullable=False),
        sa.Column("equipment_template", sa.JSON(), nullable=False),
        sa.Column("material_template", sa.JSON(), nullable=False),
        sa.Column("ocm_percentage", sa.Float(), nullable=False, server_default="15"),
        sa.Column("cp_percentage", sa.Float(), nullable=False, server_default="10"),
        sa.Column("vat_percentage", sa.Float(), nullable=False, server_default="12"),
        sa.Column("category", sa.String(), nullable=False, server_default=""),
        sa.Column("specification", sa.String(), nullable=False, server_default=""),
        sa.Column("notes", sa.String(), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.ForeignKeyConstraint(["pay_item_id"], ["pay_items.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_dupa_templates_id", "dupa_templates", ["id"], unique=False)
    op.create_index("ix_dupa_templates_pay_item_number", "dupa_templates", ["pay_item_number"], unique=True)
    op.create_index("ix_dupa_templates_category", "dupa_templates", ["category"], unique=False)
    op.create_index("ix_dupa_templates_is_active", "dupa_templates", ["is_active"], unique=False)

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("project_name", sa.String(), nullable=False),
        sa.Column("project_location", sa.String(), nullable=False),
        sa.Column("district", sa.String(), nullable=False, server_default="Bukidnon 1st"),
        sa.Column(
            "implementing_office",
            sa.String(),
            nullable=False,
            server_default="DPWH Bukidnon 1st District Engineering Office",
        ),
        sa.Column("appropriation", sa.Float(), nullable=False, server_default="0"),
        sa.Column("contract_id", sa.String(), nullable=True),
        sa.Column("project_type", sa.String(), nullable=False, server_default=""),
        sa.Column("status", sa.String(), nullable=False, server_default="Planning"),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("description", sa.String(), nullable=False, server_default=""),
        sa.Column("hauling_cost_per_km", sa.Float(), nullable=False, server_default="0"),
        sa.Column("distance_from_office", sa.Float(), nullable=False, server_default="0"),
        sa.Column("hauling_config", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.CheckConstraint(
            "status IN ('Planning','Approved','Ongoing','Completed','Cancelled')",
            name="ck_projects_status_allowed",
        ),
        sa.CheckConstraint("hauling_cost_per_km >= 0", name="ck_projects_hauling_cost_nonnegative"),
        sa.CheckConstraint("distance_from_office >= 0", name="ck_projects_distance_nonnegative"),
    )
    op.create_index("ix_projects_id", "projects", ["id"], unique=False)
    op.create_index("ix_projects_project_location", "projects", ["project_location"], unique=False)
    op.create_index("ix_projects_contract_id", "projects", ["contract_id"], unique=False)
    op.create_index("ix_projects_status", "projects", ["status"], unique=False)

    op.create_table(
        "project_boq",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=False),
        sa.Column("pay_item_number", sa.String(), nullable=False),
        sa.Column("pay_item_description", sa.String(), nullable=False),
        sa.Column("unit_of_measurement", sa.String(), nullable=False),
        sa.Column("output_per_hour", sa.Float(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("labor_items", sa.JSON(), nullable=False),
        sa.Column("equipment_items", sa.JSON(), nullable=False),
        sa.Column("material_items", sa.JSON(), nullable=False),
        sa.Column("labor_cost", sa.Float(), nullable=False, server_default="0"),
        sa.Column("equipment_cost", sa.Float(), nullable=False, server_default="0"),
        sa.Column("material_cost", sa.Float(), nullable=False, server_default="0"),
        *[sa.Column(col, sa.Float(), nullable=False) for col in BOQ_COST_COLUMNS],
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("as_of_date", sa.DateTime(), nullable=True),
        sa.Column("instantiated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["template_id"], ["dupa_templates.id"], ondelete="RESTRICT"),
        sa.CheckConstraint("quantity >= 0", name="ck_project_boq_quantity_nonnegative"),
    )
    op.create_index("ix_project_boq_id", "project_boq", ["id"], unique=False)
    op.create_index("ix_project_boq_project_id", "project_boq", ["project_id"], unique=False)
    op.create_index("ix_project_boq_template_id", "project_boq", ["template_id"], unique=False)
    op.create_index(
        "ix_project_boq_project_pay_item",
        "project_boq",
        ["project_id", "pay_item_number"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("project_boq")
    op.drop_table("projects")
    op.drop_table("dupa_templates")
